from typing import Dict

#: surface form (lowercased, without trailing period) => normalized
#: honorific
male_titles = {
    "eng": {"mr": "mr", "mssr": "mssr", "mister": "mr", "sir": "sir", "lord": "lord"},
    "fra": {
        "monsieur": "m",
        "m": "m",
        "mr": "m",
        "seigneur": "seigneur",
        "duc": "duc",
        "comte": "comte",
        "sire": "sire",
    },
}

female_titles = {
    "eng": {
        "ms": "ms",
        "mrs": "mrs",
        "missus": "mrs",
        "miss": "miss",
        "lady": "lady",
    },
    "fra": {
        "madame": "mme",
        "mme": "mme",
        "mademoiselle": "mlle",
        "mlle": "mlle",
        "dame": "dame",
        "duchesse": "duchesse",
        "comtesse": "comtesse",
    },
}

neutral_titles = {
    "eng": {
        "dr": "dr",
        "doctor": "dr",
        "gen": "gen",
        "adm": "adm",
        "pres": "pres",
        "prof": "prof",
    },
    "fra": {"dr": "dr", "docteur": "dr", "pr": "pr", "professeur": "pr"},
}

all_titles = {
    key: {**male_titles[key], **female_titles[key], **neutral_titles[key]}
    for key in male_titles.keys()
}


def honorific_lexicon(lang: str = "eng") -> Dict[str, str]:
    """Return a copy of the default honorific lexicon of ``lang``,
    mapping a lowercased surface form to its normalized form."""
    try:
        return dict(all_titles[lang])
    except KeyError:
        raise ValueError(
            f"unsupported lang for honorific_lexicon: {lang} (supported langs: {list(all_titles.keys())})"
        )
