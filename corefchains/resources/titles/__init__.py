from .titles import (
    male_titles,
    female_titles,
    neutral_titles,
    all_titles,
    honorific_lexicon,
)
