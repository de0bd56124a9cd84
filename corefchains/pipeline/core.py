from __future__ import annotations
from dataclasses import dataclass
from typing import (
    Any,
    Dict,
    Generator,
    Iterable,
    List,
    Literal,
    Optional,
    Sequence,
    Set,
    Tuple,
    TypeVar,
    Union,
    TYPE_CHECKING,
)
import sys
from corefchains.pipeline.progress import (
    ProgressReporter,
    get_progress_reporter,
    track,
)

if TYPE_CHECKING:
    from corefchains.coref import Mention, MentionChain


#: a detected mention: ``(phrase, entity type, sentence offset)``
MentionTriple = Tuple[str, str, int]

T = TypeVar("T")


def check_mentions(coref_mentions: Iterable[Sequence[Any]]) -> List[MentionTriple]:
    """Check that each mention of a document is a ``(phrase, entity
    type, sentence offset)`` triple

    :return: the mentions, as a list of tuples
    :raise ValueError: on the first malformed mention
    """
    triples = []
    for i, mention in enumerate(coref_mentions):
        if not isinstance(mention, (tuple, list)) or len(mention) != 3:
            raise ValueError(
                f"mention {i} is not a (phrase, entity type, sentence offset) triple: {mention!r}"
            )
        phrase, entity_type, sentence_offset = mention
        if (
            not isinstance(phrase, str)
            or not isinstance(entity_type, str)
            or isinstance(sentence_offset, bool)
            or not isinstance(sentence_offset, int)
        ):
            raise ValueError(f"malformed mention {i}: {mention!r}")
        triples.append((phrase, entity_type, sentence_offset))
    return triples


class PipelineStep:
    """A step of a :class:`Pipeline`

    A step reads some attributes of the :class:`PipelineState` of a
    document (:meth:`needs` and :meth:`optional_needs`), and returns
    the attributes it produces (:meth:`production`) as a dict.

    .. note::

        ``__call__``, ``needs`` and ``production`` _must_ be
        overridden by derived classes.
    """

    lang: str
    progress_reporter: ProgressReporter

    def _pipeline_init_(
        self, lang: str, progress_reporter: ProgressReporter, **kwargs
    ) -> Optional[Dict[str, Any]]:
        """Called by the pipeline before each document.

        :param lang: ISO 639-3 code of the document language
        :param progress_reporter: reporter for the progress of the
            step over the document mentions
        :return: ``None``, or pipeline parameters to override for the
            next steps
        """
        langs = self.supported_langs()
        if langs != "any" and not lang in langs:
            raise ValueError(
                f"{self.__class__.__name__} does not support lang {lang} (supported langs: {sorted(langs)})"
            )
        self.lang = lang
        self.progress_reporter = progress_reporter
        return None

    def _progress_(
        self, mentions: Iterable[T], total: Optional[int] = None
    ) -> Generator[T, None, None]:
        yield from track(self.progress_reporter, mentions, total, unit="mention")

    def __call__(self, **kwargs) -> Dict[str, Any]:
        raise NotImplementedError()

    def supported_langs(self) -> Union[Set[str], Literal["any"]]:
        """
        :return: ISO 639-3 codes of the supported languages, or
            ``'any'``
        """
        return {"eng"}

    def needs(self) -> Set[str]:
        raise NotImplementedError()

    def optional_needs(self) -> Set[str]:
        return set()

    def production(self) -> Set[str]:
        raise NotImplementedError()


@dataclass
class PipelineState:
    """Annotations of a single document, filled by the steps of a
    :class:`Pipeline`"""

    #: document text, if any
    text: Optional[str] = None

    #: detected mentions, in reading order
    coref_mentions: Optional[List[MentionTriple]] = None

    #: mentions created from ``coref_mentions``
    mentions: Optional[List[Mention]] = None

    #: chain identifier of each mention
    coref_chain_ids: Optional[List[int]] = None

    #: mention chains, sorted by identifier
    mention_chains: Optional[List[MentionChain]] = None

    def get_chain_of(self, phrase: str) -> Optional[MentionChain]:
        """Get the chain of the first mention with the given phrase
        (case-insensitive), or ``None`` if there is no such mention"""
        assert not self.mentions is None
        assert not self.coref_chain_ids is None
        assert not self.mention_chains is None
        phrase = phrase.lower()
        for mention, chain_id in zip(self.mentions, self.coref_chain_ids):
            if mention.phrase.lower() == phrase:
                return self.mention_chains[chain_id]
        return None

    def chains_phrases(self) -> List[List[str]]:
        """Phrases of the mentions of each chain, by chain identifier"""
        assert not self.mention_chains is None
        return [[m.phrase for m in chain] for chain in self.mention_chains]


class Pipeline:
    """Runs coreference steps on documents

    Each call processes a single document: steps are initialised
    again, and a new :class:`PipelineState` is built from the call
    arguments.
    """

    def __init__(
        self,
        steps: List[PipelineStep],
        lang: str = "eng",
        progress_report: Optional[Literal["tqdm"]] = "tqdm",
        warn: bool = True,
    ) -> None:
        """
        :param steps: steps to run, in order
        :param lang: ISO 639-3 code of the documents language
        :param progress_report: ``'tqdm'`` to show progress with tqdm,
            ``None`` to stay silent
        :param warn: if ``True``, print unsatisfied optional needs as
            warnings
        """
        self.steps = steps
        self.lang = lang
        self.progress_reporter = get_progress_reporter(progress_report)
        self.warn = warn

    def check_valid(self, *args: str) -> Tuple[bool, List[str]]:
        """Check that the needs of each step are satisfied by the
        initial state attributes and by the production of the previous
        steps

        :param args: names of the initial state attributes, besides
            ``text``
        :return: ``(True, warnings)`` or ``(False, errors)``
        """
        available = {"text", *args}
        warnings = []
        for i, step in enumerate(self.steps, start=1):
            name = f"step {i} ({step.__class__.__name__})"
            missing = step.needs() - available
            if len(missing) > 0:
                return (
                    False,
                    [f"{name} misses {sorted(missing)} (available: {sorted(available)})"],
                )
            missing = step.optional_needs() - available
            if len(missing) > 0:
                warnings.append(f"{name} misses optional {sorted(missing)}")
            available |= step.production()
        return (True, warnings)

    def _init_steps_(self):
        params: Dict[str, Any] = {
            "progress_reporter": self.progress_reporter.step_reporter()
        }
        for step in self.steps:
            overrides = step._pipeline_init_(self.lang, **params)
            if not overrides is None:
                params.update(overrides)

    def __call__(
        self,
        coref_mentions: Optional[Iterable[Sequence[Any]]] = None,
        text: Optional[str] = None,
        **kwargs,
    ) -> PipelineState:
        """Process a document

        :param coref_mentions: mentions of the document, as
            ``(phrase, entity type, sentence offset)`` triples in
            reading order
        :param text: document text
        :param kwargs: additional initial state attributes
        :raise ValueError: if a mention is malformed, or if the needs
            of a step are not satisfied
        """
        if not coref_mentions is None:
            kwargs["coref_mentions"] = check_mentions(coref_mentions)

        is_valid, messages = self.check_valid(*kwargs.keys())
        if not is_valid:
            raise ValueError(messages)
        if self.warn:
            for message in messages:
                print(f"[warning] {message}", file=sys.stderr)

        self._init_steps_()

        state = PipelineState(text=text)
        for key, value in kwargs.items():
            setattr(state, key, value)

        for step in track(self.progress_reporter, self.steps, unit="step"):
            self.progress_reporter.describe_(step.__class__.__name__)
            for key, value in step(**vars(state)).items():
                setattr(state, key, value)
        self.progress_reporter.close_()

        return state

    def resolve_documents(
        self, documents: Iterable[Iterable[Sequence[Any]]]
    ) -> List[PipelineState]:
        """Process several documents independently

        :param documents: mentions of each document
        :return: one state per document
        """
        return [self(coref_mentions=mentions) for mentions in documents]
