from __future__ import annotations
from typing import Callable, FrozenSet, List, Optional, Tuple, Union
from dataclasses import dataclass, field
from nltk.tokenize.destructive import NLTKWordTokenizer
from nameparser.util import lc
from corefchains.gender import Gender, as_gender
from corefchains.coref.config import CorefConfig
from corefchains.coref.chain import MentionChain, default_compositions
from corefchains.coref.matchers import SynonymMatch


# Mentions compare by identity: two occurrences of the same phrase
# are two different mentions, even if all their fields are equal.
@dataclass(frozen=True, eq=False)
class Mention:
    """One occurrence of a referring expression in a document"""

    #: raw phrase, as found in the text
    phrase: str
    #: entity type label (``PERSON``, ``ORGANIZATION``, ``MALE_PRONOUN``...)
    entity_type: str
    #: normalized honorifics (``'mr'``, ``'dr'``...)
    honorifics: FrozenSet[str] = frozenset()
    #: normalized tokens, honorifics excluded
    normal_tokens: Tuple[str, ...] = ()
    #: ``None`` if unknown
    gender: Optional[Gender] = None
    is_pronominal: bool = False
    normal_phrase: str = field(init=False)

    def __post_init__(self):
        if not isinstance(self.phrase, str):
            raise ValueError(f"mention phrase must be a string (got {self.phrase!r})")
        if not isinstance(self.entity_type, str) or self.entity_type == "":
            raise ValueError(
                f"mention entity type must be a non-empty string (got {self.entity_type!r})"
            )
        if any(not isinstance(t, str) for t in self.normal_tokens):
            raise ValueError(f"normal tokens must be strings: {self.normal_tokens!r}")
        # the dataclass is frozen: normalized fields are set through
        # object.__setattr__
        object.__setattr__(self, "honorifics", frozenset(self.honorifics))
        object.__setattr__(self, "normal_tokens", tuple(self.normal_tokens))
        object.__setattr__(self, "gender", as_gender(self.gender))
        object.__setattr__(self, "normal_phrase", " ".join(self.normal_tokens))

    def __repr__(self) -> str:
        return f"<{self.phrase}, {self.entity_type}, {self.gender}>"


class MentionFactory:
    """Creates mentions from raw phrases, and promotes mentions to new
    mention chains.

    A factory holds no per-document state: it can be shared by the
    resolvers of several documents, which then share its synonym
    table.
    """

    def __init__(
        self,
        config: Optional[CorefConfig] = None,
        tokenizer: Optional[Callable[[str], List[str]]] = None,
        synonym_match: Optional[SynonymMatch] = None,
    ) -> None:
        """
        :param config: honorific lexicon, pronoun table and matchers
            configuration.  If ``None``, default to
            ``CorefConfig.for_lang("eng")``.
        :param tokenizer: a function splitting a phrase into tokens.
            If ``None``, default to NLTK's word tokenizer.
        :param synonym_match: synonym matcher used by all the chains
            promoted by this factory.  Pass the same instance to
            several factories to share a synonym table.  If ``None``,
            a new one is created, with the weight of ``config``.
        """
        if config is None:
            config = CorefConfig.for_lang("eng")
        if not isinstance(config, CorefConfig):
            raise ValueError(f"config must be a CorefConfig (got {type(config)})")
        self.config = config

        self.tokenizer = tokenizer or NLTKWordTokenizer().tokenize

        if synonym_match is None:
            synonym_match = SynonymMatch(config.weights.synonym)
        if not isinstance(synonym_match, SynonymMatch):
            raise ValueError(
                f"synonym_match must be a SynonymMatch (got {type(synonym_match)})"
            )
        self.synonym_match = synonym_match
        self.compositions = default_compositions(config, self.synonym_match)

    def create(self, phrase: str, entity_type: str) -> Mention:
        """Create a mention from a phrase and its entity type

        :param phrase: raw phrase
        :param entity_type: entity type label
        """
        if not isinstance(phrase, str):
            raise ValueError(f"mention phrase must be a string (got {phrase!r})")

        pronoun = phrase.strip().lower()
        gender = self.config.pronoun_genders.get(pronoun)
        if not gender is None:
            return Mention(
                phrase,
                entity_type,
                frozenset(),
                (pronoun,),
                gender=gender,
                is_pronominal=True,
            )

        honorifics, tokens = self._extract_tokens(phrase)
        return Mention(
            phrase,
            entity_type,
            honorifics,
            tokens,
            gender=self.config.entity_type_genders.get(entity_type),
            is_pronominal=False,
        )

    def _extract_tokens(self, phrase: str) -> Tuple[FrozenSet[str], Tuple[str, ...]]:
        """Parse a phrase into its leading honorifics and its normal
        tokens.  Punctuation-only tokens are discarded."""
        tokens = [lc(token) for token in self.tokenizer(phrase)]
        tokens = [t for t in tokens if any(c.isalnum() for c in t)]

        honorifics = set()
        i = 0
        while i < len(tokens) and tokens[i] in self.config.honorifics:
            honorifics.add(self.config.honorifics[tokens[i]])
            i += 1

        return frozenset(honorifics), tuple(tokens[i:])

    def promote(
        self, mention: Mention, sentence_offset: int, identifier: int
    ) -> MentionChain:
        """Create a new mention chain containing only ``mention``

        :param mention: founding mention of the chain
        :param sentence_offset: sentence offset of ``mention``
        :param identifier: identifier of the new chain, that is the
            number of chains already in its document
        """
        return MentionChain(mention, sentence_offset, identifier, self.compositions)

    def add_synonym(self, phrase1: str, phrase2: str):
        """Register two normal phrases as synonyms for all chains of
        this factory.  See :meth:`.SynonymMatch.add_synonym`."""
        self.synonym_match.add_synonym(phrase1, phrase2)

    def remove_synonym(self, phrase1: str, phrase2: str):
        self.synonym_match.remove_synonym(phrase1, phrase2)

    def clear_synonyms(self):
        self.synonym_match.clear_synonyms()
