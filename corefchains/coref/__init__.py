from corefchains.coref.config import (
    CorefConfig,
    MatcherWeights,
    PERSON,
    LOCATION,
    ORGANIZATION,
    OTHER,
    MALE_PRONOUN,
    FEMALE_PRONOUN,
    NEUTER_PRONOUN,
)
from corefchains.coref.matchers import (
    NO_MATCH,
    Matcher,
    Killer,
    BooleanMatcher,
    ExactPhraseMatch,
    SequenceSubstringMatch,
    SynonymMatch,
    EntityTypeMatch,
    GenderKiller,
    HonorificConflictKiller,
)
from corefchains.coref.chain import (
    ChainComposition,
    ChainStrategies,
    MentionChain,
    default_compositions,
)
from corefchains.coref.mention import Mention, MentionFactory
from corefchains.coref.within_doc import WithinDocCoref, sentence_distance
