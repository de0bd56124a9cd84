from typing import Dict
from corefchains.gender import Gender

males_pronouns = {
    "eng": {"he", "him", "his", "himself"},
    "fra": {"il", "lui", "lui-même"},
}
females_pronouns = {
    "eng": {"she", "her", "hers", "herself"},
    "fra": {"elle", "elle-même"},
}
neuter_pronouns = {
    "eng": {"it", "its", "itself"},
    "fra": set(),
}


def pronoun_genders(lang: str = "eng") -> Dict[str, Gender]:
    """Return the default pronoun table of ``lang``, mapping a
    lowercased pronoun to its gender."""
    if not lang in males_pronouns:
        raise ValueError(
            f"unsupported lang for pronoun_genders: {lang} (supported langs: {list(males_pronouns.keys())})"
        )
    table = {}
    for pronoun in neuter_pronouns[lang]:
        table[pronoun] = Gender.IT
    for pronoun in males_pronouns[lang]:
        table[pronoun] = Gender.MALE
    for pronoun in females_pronouns[lang]:
        table[pronoun] = Gender.FEMALE
    return table
