from corefchains.gender import Gender
from corefchains.coref import (
    CorefConfig,
    MatcherWeights,
    Mention,
    MentionFactory,
    MentionChain,
    WithinDocCoref,
    NO_MATCH,
)
