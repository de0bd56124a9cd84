"""Matching and killing functions used to compare a mention with a
mention chain.

A :class:`Matcher` returns a score: the higher the score, the more
evidence there is that the mention belongs to the chain.
:data:`NO_MATCH` is returned when the matcher does not apply.  A
:class:`Killer` vetoes the membership of a mention to a chain,
whatever the matchers scores.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Collection, Dict, Optional, Set
from collections import defaultdict
from corefchains.utils import share_run

if TYPE_CHECKING:
    from corefchains.coref.mention import Mention
    from corefchains.coref.chain import MentionChain


#: score returned by a matcher that does not apply
NO_MATCH = 0


class Matcher:
    """An abstract matching function

    .. note::

        The ``match`` method _must_ be overridden by derived classes.
    """

    NO_MATCH = NO_MATCH

    def match(self, mention: Mention, chain: MentionChain) -> int:
        """
        :return: a score greater than :data:`NO_MATCH`, or
            :data:`NO_MATCH` if the matcher does not apply
        """
        raise NotImplementedError()


class Killer:
    """An abstract killing function

    .. note::

        The ``kill`` method _must_ be overridden by derived classes.
    """

    def kill(self, mention: Mention, chain: MentionChain) -> bool:
        """
        :return: ``True`` if ``mention`` can't belong to ``chain``
        """
        raise NotImplementedError()


class BooleanMatcher(Matcher):
    """A matcher returning a fixed score when a boolean test
    succeeds.  Derived classes must override ``match_boolean``."""

    def __init__(self, score: int) -> None:
        """
        :param score: score returned on success.  Must be a positive
            integer.
        """
        if isinstance(score, bool) or not isinstance(score, int) or score <= NO_MATCH:
            raise ValueError(
                f"{self.__class__.__name__} score must be an integer greater than {NO_MATCH} (got {score!r})"
            )
        self.score = score

    def match(self, mention: Mention, chain: MentionChain) -> int:
        return self.score if self.match_boolean(mention, chain) else NO_MATCH

    def match_boolean(self, mention: Mention, chain: MentionChain) -> bool:
        raise NotImplementedError()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.score})"


class ExactPhraseMatch(BooleanMatcher):
    """Match when the mention normal tokens are exactly those of a
    member of the chain.  Mentions without tokens never match."""

    def match_boolean(self, mention: Mention, chain: MentionChain) -> bool:
        if len(mention.normal_tokens) == 0:
            return False
        return any(mention.normal_tokens == member.normal_tokens for member in chain)


class SequenceSubstringMatch(BooleanMatcher):
    """Match when the mention shares a contiguous run of normal tokens
    with a member of the chain.

    The run must be at least ``min_run`` tokens long.  When both token
    sequences are shorter than ``min_run``, the run must span the
    longest of the two: a single token mention only matches a member
    consisting of that exact token.
    """

    def __init__(self, score: int, min_run: int = 3) -> None:
        """
        :param score: score returned on success
        :param min_run: minimum length of the shared run of tokens
        """
        super().__init__(score)
        if isinstance(min_run, bool) or not isinstance(min_run, int) or min_run < 1:
            raise ValueError(f"min_run must be a positive integer (got {min_run!r})")
        self.min_run = min_run

    def match_boolean(self, mention: Mention, chain: MentionChain) -> bool:
        tokens = mention.normal_tokens
        if len(tokens) == 0:
            return False
        for member in chain:
            member_tokens = member.normal_tokens
            run_len = min(self.min_run, max(len(tokens), len(member_tokens)))
            if share_run(tokens, member_tokens, run_len):
                return True
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.score}, min_run={self.min_run})"


class SynonymMatch(BooleanMatcher):
    """Match when the mention normal phrase is a registered synonym
    of the normal phrase of a member of the chain.

    Synonymy is symmetric.  The synonym table is mutable: when a
    single instance is shared by several resolvers, accesses must be
    serialized by the caller.
    """

    def __init__(self, score: int) -> None:
        super().__init__(score)
        self.synonyms: Dict[str, Set[str]] = defaultdict(set)

    def add_synonym(self, phrase1: str, phrase2: str):
        """Register ``phrase1`` and ``phrase2`` as synonyms"""
        self.synonyms[phrase1].add(phrase2)
        self.synonyms[phrase2].add(phrase1)

    def remove_synonym(self, phrase1: str, phrase2: str):
        """Unregister the synonymy between ``phrase1`` and
        ``phrase2``, if it exists"""
        for a, b in ((phrase1, phrase2), (phrase2, phrase1)):
            if not a in self.synonyms:
                continue
            self.synonyms[a].discard(b)
            if len(self.synonyms[a]) == 0:
                del self.synonyms[a]

    def clear_synonyms(self):
        self.synonyms.clear()

    def are_synonyms(self, phrase1: str, phrase2: str) -> bool:
        return phrase1 in self.synonyms and phrase2 in self.synonyms[phrase1]

    def match_boolean(self, mention: Mention, chain: MentionChain) -> bool:
        synonyms = self.synonyms.get(mention.normal_phrase)
        if not synonyms:
            return False
        return any(member.normal_phrase in synonyms for member in chain)


class EntityTypeMatch(BooleanMatcher):
    """Match on the mention entity type alone.

    With a fixed ``entity_type``, match when the mention has this
    type and the chain has one of ``chain_types`` (any type if
    ``chain_types`` is ``None``).  Otherwise, match when the mention is
    pronominal and has the type of a pronominal member of the chain.
    """

    def __init__(
        self,
        score: int,
        entity_type: Optional[str] = None,
        chain_types: Optional[Collection[str]] = None,
    ) -> None:
        super().__init__(score)
        if not entity_type is None and (
            not isinstance(entity_type, str) or entity_type == ""
        ):
            raise ValueError(f"invalid entity type: {entity_type!r}")
        self.entity_type = entity_type
        self.chain_types = None if chain_types is None else frozenset(chain_types)

    def match_boolean(self, mention: Mention, chain: MentionChain) -> bool:
        if not self.entity_type is None:
            return mention.entity_type == self.entity_type and (
                self.chain_types is None or chain.entity_type in self.chain_types
            )
        if not mention.is_pronominal:
            return False
        return any(
            member.is_pronominal and member.entity_type == mention.entity_type
            for member in chain
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.score}, {self.entity_type})"


class GenderKiller(Killer):
    """Veto when both the mention and the chain have a known, different
    gender"""

    def kill(self, mention: Mention, chain: MentionChain) -> bool:
        return (
            not mention.gender is None
            and not chain.gender is None
            and mention.gender != chain.gender
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class HonorificConflictKiller(Killer):
    """Veto when both the mention and the chain have honorifics, and
    none of them are shared"""

    def kill(self, mention: Mention, chain: MentionChain) -> bool:
        return (
            len(mention.honorifics) > 0
            and len(chain.honorifics) > 0
            and mention.honorifics.isdisjoint(chain.honorifics)
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
