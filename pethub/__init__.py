"""PetHub back office API for pet-care businesses"""

__version__ = "1.0.0"
