from enum import Enum


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
    PREFER_NOT_TO_SAY = "Prefer not to say"


class Occupation(str, Enum):
    STUDENT = "Student"
    WORKING_PROFESSIONAL = "Working Professional"
    FREELANCER = "Freelancer"
    BUSINESS = "Business"
    OTHER = "Other"


class LookingFor(str, Enum):
    ROOM = "Room"
    ROOMMATE = "Roommate"
    BOTH = "Both"


class Smoking(str, Enum):
    YES = "Yes"
    NO = "No"
    OCCASIONALLY = "Occasionally"


class Drinking(str, Enum):
    YES = "Yes"
    NO = "No"
    SOCIALLY = "Socially"


class Pets(str, Enum):
    HAVE_PETS = "Have pets"
    NO_PETS = "No pets"
    PET_FRIENDLY = "Pet-friendly"


class Cleanliness(str, Enum):
    VERY_CLEAN = "Very clean"
    MODERATE = "Moderate"
    RELAXED = "Relaxed"


class FoodPreference(str, Enum):
    VEGETARIAN = "Vegetarian"
    NON_VEGETARIAN = "Non-vegetarian"
    VEGAN = "Vegan"
    NO_PREFERENCE = "No preference"


class GuestFrequency(str, Enum):
    FREQUENTLY = "Frequently"
    SOMETIMES = "Sometimes"
    RARELY = "Rarely"
    NEVER = "Never"
