from typing import Any, Dict, List, Literal, Optional, Set, Tuple, Union
from corefchains.pipeline.core import MentionTriple, PipelineStep
from corefchains.coref import CorefConfig, MentionFactory, WithinDocCoref


class WithinDocCoreferenceResolver(PipelineStep):
    """A rule-based within-document coreference resolver.

    Mentions are given to the pipeline as ``coref_mentions``, a list
    of ``(phrase, entity type, sentence offset)`` triples in reading
    order.  Each pipeline run is considered as a new document.
    """

    def __init__(
        self,
        config: Optional[CorefConfig] = None,
        synonyms: Optional[List[Tuple[str, str]]] = None,
    ) -> None:
        """
        :param config: resolver configuration.  If ``None``, the
            configuration is built from the default resources of the
            pipeline language, at each run.
        :param synonyms: pairs of normal phrases (lowercased tokens
            joined by spaces, such as ``'john smith'``) to consider as
            synonyms.
        """
        self.config = config
        self.synonyms = synonyms or []
        # configuration of the current run
        self._run_config: Optional[CorefConfig] = None
        super().__init__()

    def _pipeline_init_(self, lang: str, **kwargs):
        super()._pipeline_init_(lang, **kwargs)
        self._run_config = self.config or CorefConfig.for_lang(lang)

    def __call__(self, coref_mentions: List[MentionTriple], **kwargs) -> Dict[str, Any]:
        assert not self._run_config is None

        factory = MentionFactory(self._run_config)
        for phrase1, phrase2 in self.synonyms:
            factory.add_synonym(phrase1, phrase2)
        coref = WithinDocCoref(factory)

        mentions = []
        chain_ids = []
        for phrase, entity_type, sentence_offset in self._progress_(coref_mentions):
            mention = factory.create(phrase, entity_type)
            mentions.append(mention)
            chain_ids.append(coref.resolve_mention(mention, sentence_offset))

        return {
            "mentions": mentions,
            "coref_chain_ids": chain_ids,
            "mention_chains": coref.mention_chains,
        }

    def supported_langs(self) -> Union[Set[str], Literal["any"]]:
        if not self.config is None:
            return "any"
        return {"eng", "fra"}

    def needs(self) -> Set[str]:
        return {"coref_mentions"}

    def production(self) -> Set[str]:
        return {"mentions", "coref_chain_ids", "mention_chains"}
