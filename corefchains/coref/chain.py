from __future__ import annotations
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Set, Tuple
from dataclasses import dataclass
from enum import Enum
from corefchains.gender import Gender
from corefchains.coref.matchers import (
    NO_MATCH,
    Matcher,
    Killer,
    ExactPhraseMatch,
    EntityTypeMatch,
    SequenceSubstringMatch,
    SynonymMatch,
    GenderKiller,
    HonorificConflictKiller,
)

if TYPE_CHECKING:
    from corefchains.coref.config import CorefConfig
    from corefchains.coref.mention import Mention


class ChainComposition(Enum):
    """What kind of mentions a chain contains.  Determines the
    matching and killing functions of the chain."""

    #: only non-pronominal mentions
    PURE_ENTITY = "pure_entity"
    #: at least one pronominal mention
    HAS_PRONOUN = "has_pronoun"


@dataclass(frozen=True)
class ChainStrategies:
    matchers: Tuple[Matcher, ...]
    killers: Tuple[Killer, ...]


CompositionTable = Dict[ChainComposition, ChainStrategies]


def default_compositions(
    config: CorefConfig, synonym_match: Optional[SynonymMatch] = None
) -> CompositionTable:
    """Build the default composition table.

    A person chain with no pronominal member can still be matched by
    either a male or a female pronoun, hence the two
    :class:`.EntityTypeMatch` instances of chains with no pronominal
    member (see :attr:`.CorefConfig.person_types`).  Once a pronoun
    joins the chain, a single :class:`.EntityTypeMatch` accepts further
    pronouns of the same type.

    :param config:
    :param synonym_match: the synonym matcher to use in the table.  If
        ``None``, a new one is created.
    """
    weights = config.weights
    exact_phrase = ExactPhraseMatch(weights.exact_phrase)
    sequence_substring = SequenceSubstringMatch(
        weights.sequence_substring, config.min_run
    )
    if synonym_match is None:
        synonym_match = SynonymMatch(weights.synonym)
    killers = (GenderKiller(), HonorificConflictKiller())

    return {
        ChainComposition.PURE_ENTITY: ChainStrategies(
            (
                exact_phrase,
                EntityTypeMatch(
                    weights.entity_type, config.male_pronoun_type, config.person_types
                ),
                EntityTypeMatch(
                    weights.entity_type, config.female_pronoun_type, config.person_types
                ),
                sequence_substring,
                synonym_match,
            ),
            killers,
        ),
        ChainComposition.HAS_PRONOUN: ChainStrategies(
            (
                exact_phrase,
                EntityTypeMatch(weights.pronoun_entity_type),
                sequence_substring,
                synonym_match,
            ),
            killers,
        ),
    }


class MentionChain:
    """An append-only cluster of mentions referring to the same entity
    within a document.

    The identifier and the entity type of a chain are fixed at
    creation.  Honorifics, the maximum sentence offset and mentions
    only grow.  The gender is latched: once known, it never changes.
    """

    def __init__(
        self,
        mention: Mention,
        sentence_offset: int,
        identifier: int,
        compositions: CompositionTable,
    ) -> None:
        """
        :param mention: founding mention of the chain
        :param sentence_offset: sentence offset of ``mention``
        :param identifier: unique identifier of the chain within its
            document
        :param compositions: matchers and killers to use for each
            :class:`ChainComposition`
        """
        missing = set(ChainComposition) - set(compositions.keys())
        if len(missing) > 0:
            raise ValueError(f"composition table misses compositions: {missing}")
        self.compositions = compositions

        self._identifier = identifier
        self._entity_type = mention.entity_type
        self._mentions: List[Mention] = [mention]
        self._honorifics: Set[str] = set(mention.honorifics)
        self._gender: Optional[Gender] = mention.gender
        self._max_sentence_offset = sentence_offset
        self.composition = (
            ChainComposition.HAS_PRONOUN
            if mention.is_pronominal
            else ChainComposition.PURE_ENTITY
        )

    @property
    def identifier(self) -> int:
        return self._identifier

    @property
    def entity_type(self) -> str:
        return self._entity_type

    @property
    def mentions(self) -> List[Mention]:
        """A copy of the mentions of this chain, in order of addition.
        Iterate over the chain to avoid the copy."""
        return list(self._mentions)

    @property
    def honorifics(self) -> Set[str]:
        return set(self._honorifics)

    @property
    def gender(self) -> Optional[Gender]:
        return self._gender

    @property
    def max_sentence_offset(self) -> int:
        """Offset of the last sentence containing a mention of this
        chain"""
        return self._max_sentence_offset

    @property
    def matchers(self) -> Tuple[Matcher, ...]:
        return self.compositions[self.composition].matchers

    @property
    def killers(self) -> Tuple[Killer, ...]:
        return self.compositions[self.composition].killers

    def add(self, mention: Mention, sentence_offset: int):
        """Add a mention found at the given sentence offset"""
        self._mentions.append(mention)
        self._honorifics |= mention.honorifics
        if self._gender is None and not mention.gender is None:
            self._gender = mention.gender
        self._max_sentence_offset = max(self._max_sentence_offset, sentence_offset)
        if mention.is_pronominal:
            self.composition = ChainComposition.HAS_PRONOUN

    def killed(self, mention: Mention) -> bool:
        """Return ``True`` if a killer vetoes ``mention`` membership"""
        return any(killer.kill(mention, self) for killer in self.killers)

    def match_score(self, mention: Mention) -> int:
        """Return the best matchers score for ``mention``, or
        :data:`.NO_MATCH` if no matcher applies or if a killer
        vetoes the mention"""
        if self.killed(mention):
            return NO_MATCH
        return max(
            [matcher.match(mention, self) for matcher in self.matchers],
            default=NO_MATCH,
        )

    def __iter__(self) -> Iterator[Mention]:
        return iter(self._mentions)

    def __len__(self) -> int:
        return len(self._mentions)

    def __repr__(self) -> str:
        return (
            f"<chain {self.identifier}: {self.entity_type}, {self.gender}, "
            + f"honorifics={sorted(self._honorifics)}, "
            + f"max_sentence_offset={self.max_sentence_offset}, "
            + f"{len(self._mentions)} mentions>"
        )
