from __future__ import annotations
from typing import Iterable, List, Optional, Tuple
import sys
from corefchains.coref.matchers import NO_MATCH
from corefchains.coref.chain import MentionChain
from corefchains.coref.mention import Mention, MentionFactory


def sentence_distance(sentence_offset: int, chain: MentionChain) -> int:
    """Distance between a mention and the last mention of a chain.

    :return: ``0`` if they are in the same sentence, ``1`` if the
        chain was last mentioned one or two sentences before, ``2``
        otherwise.
    """
    gap = sentence_offset - chain.max_sentence_offset
    if gap <= 0:
        return 0
    if gap <= 2:
        return 1
    return 2


class WithinDocCoref:
    """Resolves the coreference of the mentions of a single document.

    Mentions must be resolved in reading order.  Each mention is
    either added to the best matching existing chain, or promoted to a
    new chain.  An assignment is never revisited.

    >>> coref = WithinDocCoref()
    >>> coref.resolve("Mr. John Smith", "PERSON", 1)
    0
    >>> coref.resolve("John Smith", "PERSON", 2)
    0
    """

    def __init__(self, mention_factory: Optional[MentionFactory] = None) -> None:
        """
        :param mention_factory: factory used to create mentions and to
            promote them to chains.  If ``None``, an english
            :class:`.MentionFactory` is used.  A factory can be
            shared by the resolvers of several documents.
        """
        self.mention_factory = mention_factory or MentionFactory()
        self._chains: List[MentionChain] = []
        self._last_sentence_offset: Optional[int] = None

    @property
    def mention_chains(self) -> List[MentionChain]:
        """Chains of the document, sorted by identifier"""
        return list(self._chains)

    def chain(self, identifier: int) -> MentionChain:
        """Get a chain by its identifier

        :raise IndexError: if there is no chain with this identifier
        """
        if identifier < 0:
            raise IndexError(identifier)
        return self._chains[identifier]

    def resolve_mention(self, mention: Mention, sentence_offset: int) -> int:
        """Resolve a mention, and return the identifier of its chain

        Chains are scanned in creation order.  The best chain is the
        one with the highest match score.  Among chains with the same
        score, the most recently mentioned one is preferred (see
        :func:`sentence_distance`), and then the oldest one.

        :param mention:
        :param sentence_offset: offset of the sentence containing the
            mention.  Offsets must be non-decreasing over a document.
        """
        if (
            not self._last_sentence_offset is None
            and sentence_offset < self._last_sentence_offset
        ):
            print(
                f"[warning] decreasing sentence offset ({sentence_offset} after {self._last_sentence_offset}) for mention {mention}",
                file=sys.stderr,
            )
        self._last_sentence_offset = sentence_offset

        best_chain = None
        best_key: Tuple[int, int] = (NO_MATCH, 0)
        for chain in self._chains:
            if chain.killed(mention):
                continue
            score = chain.match_score(mention)
            if score == NO_MATCH:
                continue
            key = (score, -sentence_distance(sentence_offset, chain))
            if best_chain is None or key > best_key:
                best_chain = chain
                best_key = key

        if not best_chain is None:
            best_chain.add(mention, sentence_offset)
            return best_chain.identifier

        chain = self.mention_factory.promote(
            mention, sentence_offset, len(self._chains)
        )
        self._chains.append(chain)
        return chain.identifier

    def resolve(self, phrase: str, entity_type: str, sentence_offset: int) -> int:
        """Create a mention with the mention factory, and resolve it.
        See :meth:`resolve_mention`."""
        mention = self.mention_factory.create(phrase, entity_type)
        return self.resolve_mention(mention, sentence_offset)

    def resolve_document(self, mentions: Iterable[Tuple[str, str, int]]) -> List[int]:
        """Resolve all the mentions of a document

        :param mentions: ``(phrase, entity_type, sentence_offset)``
            triples, in reading order
        :return: the chain identifier of each mention
        """
        return [
            self.resolve(phrase, entity_type, sentence_offset)
            for phrase, entity_type, sentence_offset in mentions
        ]
