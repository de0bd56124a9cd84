from .pronouns import (
    males_pronouns,
    females_pronouns,
    neuter_pronouns,
    pronoun_genders,
)
