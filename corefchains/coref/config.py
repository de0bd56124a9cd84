from __future__ import annotations
from typing import Dict, FrozenSet, Iterable, Optional, Union
from dataclasses import dataclass, field
from nameparser.util import lc
from corefchains.gender import Gender, as_gender
from corefchains.resources.titles import honorific_lexicon
from corefchains.resources.pronouns import pronoun_genders

#: entity type labels, as produced by the mention detection step
PERSON = "PERSON"
LOCATION = "LOCATION"
ORGANIZATION = "ORGANIZATION"
OTHER = "OTHER"
MALE_PRONOUN = "MALE_PRONOUN"
FEMALE_PRONOUN = "FEMALE_PRONOUN"
NEUTER_PRONOUN = "NEUTER_PRONOUN"


@dataclass(frozen=True)
class MatcherWeights:
    """Integer weight returned by each built-in matcher on success.
    A higher weight is stronger evidence."""

    #: :class:`.ExactPhraseMatch`
    exact_phrase: int = 3
    #: :class:`.SynonymMatch`
    synonym: int = 3
    #: :class:`.SequenceSubstringMatch`
    sequence_substring: int = 1
    #: :class:`.EntityTypeMatch` of a chain with no pronominal member
    entity_type: int = 1
    #: :class:`.EntityTypeMatch` of a chain with a pronominal member
    pronoun_entity_type: int = 3

    def __post_init__(self):
        for name, weight in vars(self).items():
            if isinstance(weight, bool) or not isinstance(weight, int) or weight < 1:
                raise ValueError(
                    f"matcher weight {name} must be a positive integer (got {weight!r})"
                )


@dataclass
class CorefConfig:
    """Configuration of a :class:`.MentionFactory` and of the chains it
    promotes.

    Use :meth:`CorefConfig.for_lang` to get a configuration using the
    default resources of a language.
    """

    #: honorific lexicon: lowercased surface form => normalized form
    honorifics: Dict[str, str] = field(default_factory=dict)

    #: pronoun table: lowercased pronoun => gender
    pronoun_genders: Dict[str, Gender] = field(default_factory=dict)

    #: gender assigned to non-pronominal mentions, by entity type.
    #: Empty by default: non-pronominal mentions have an unknown gender.
    entity_type_genders: Dict[str, Gender] = field(default_factory=dict)

    weights: MatcherWeights = field(default_factory=MatcherWeights)

    #: minimum length of the token run shared with a chain member for
    #: :class:`.SequenceSubstringMatch` to succeed
    min_run: int = 3

    #: entity types targeted by the :class:`.EntityTypeMatch` instances
    #: of chains with no pronominal member
    male_pronoun_type: str = MALE_PRONOUN
    female_pronoun_type: str = FEMALE_PRONOUN

    #: entity types of the chains that can be matched by a male or a
    #: female pronoun on the sole basis of its type.  Chains of other
    #: types (locations, organizations...) are matched by pronouns only
    #: through their phrase.
    person_types: FrozenSet[str] = frozenset({PERSON})

    def __post_init__(self):
        if isinstance(self.min_run, bool) or not isinstance(self.min_run, int):
            raise ValueError(f"min_run must be an integer (got {self.min_run!r})")
        if self.min_run < 1:
            raise ValueError(f"min_run must be at least 1 (got {self.min_run})")

        honorifics = {}
        for surface, normalized in self.honorifics.items():
            if not isinstance(surface, str) or not isinstance(normalized, str):
                raise ValueError(
                    f"invalid honorific lexicon entry: {surface!r} => {normalized!r}"
                )
            if lc(surface) == "" or lc(normalized) == "":
                raise ValueError(
                    f"empty honorific lexicon entry: {surface!r} => {normalized!r}"
                )
            honorifics[lc(surface)] = lc(normalized)
        self.honorifics = honorifics

        pronouns = {}
        for pronoun, gender in self.pronoun_genders.items():
            if not isinstance(pronoun, str) or pronoun.strip() == "":
                raise ValueError(f"invalid pronoun table entry: {pronoun!r}")
            if gender is None:
                raise ValueError(f"pronoun {pronoun!r} has no gender")
            pronouns[pronoun.strip().lower()] = as_gender(gender)
        self.pronoun_genders = pronouns

        self.entity_type_genders = {
            entity_type: as_gender(gender)
            for entity_type, gender in self.entity_type_genders.items()
        }

        for attr in ("male_pronoun_type", "female_pronoun_type"):
            if not isinstance(getattr(self, attr), str) or getattr(self, attr) == "":
                raise ValueError(f"{attr} must be a non-empty string")

        if isinstance(self.person_types, str):
            raise ValueError(
                f"person_types must be a collection of entity types (got {self.person_types!r})"
            )
        self.person_types = frozenset(self.person_types)
        if any(not isinstance(t, str) or t == "" for t in self.person_types):
            raise ValueError(f"invalid person types: {self.person_types!r}")

    @staticmethod
    def for_lang(
        lang: str = "eng",
        weights: Optional[MatcherWeights] = None,
        min_run: int = 3,
        entity_type_genders: Optional[Dict[str, Union[str, Gender]]] = None,
        person_types: Optional[Iterable[str]] = None,
    ) -> CorefConfig:
        """Build a configuration from the default resources of a language

        :param lang: ISO 639-3 language code (``'eng'`` or ``'fra'``)
        :param weights: matcher weights.  Default to
            :class:`MatcherWeights` defaults.
        :param min_run: see :attr:`CorefConfig.min_run`
        :param entity_type_genders: see
            :attr:`CorefConfig.entity_type_genders`
        :param person_types: see :attr:`CorefConfig.person_types`.
            Default to ``{"PERSON"}``.
        """
        return CorefConfig(
            honorifics=honorific_lexicon(lang),
            pronoun_genders=pronoun_genders(lang),
            entity_type_genders=entity_type_genders or {},  # type: ignore
            weights=weights or MatcherWeights(),
            min_run=min_run,
            person_types=frozenset({PERSON}) if person_types is None else person_types,  # type: ignore
        )
