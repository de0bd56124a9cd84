from typing import List, Optional, Set, Tuple
import pytest
from hypothesis import given
import hypothesis.strategies as st
from corefchains.gender import Gender
from corefchains.coref import (
    NO_MATCH,
    ChainComposition,
    CorefConfig,
    MatcherWeights,
    Mention,
    MentionChain,
    ExactPhraseMatch,
    EntityTypeMatch,
    SequenceSubstringMatch,
    SynonymMatch,
    GenderKiller,
    HonorificConflictKiller,
    default_compositions,
)


def _classes(objs) -> List[type]:
    return [obj.__class__ for obj in objs]


PURE_ENTITY_MATCHERS = [
    ExactPhraseMatch,
    EntityTypeMatch,
    EntityTypeMatch,
    SequenceSubstringMatch,
    SynonymMatch,
]
HAS_PRONOUN_MATCHERS = [
    ExactPhraseMatch,
    EntityTypeMatch,
    SequenceSubstringMatch,
    SynonymMatch,
]
KILLERS = [GenderKiller, HonorificConflictKiller]


def test_chain_lifecycle():
    weights = MatcherWeights()
    compositions = default_compositions(CorefConfig(weights=weights))

    m1 = Mention("Mr. John Smith", "PERSON", {"mr"}, ["john", "smith"], None, False)
    chain = MentionChain(m1, 7, 0, compositions)

    assert chain.composition == ChainComposition.PURE_ENTITY
    assert _classes(chain.matchers) == PURE_ENTITY_MATCHERS
    assert _classes(chain.killers) == KILLERS
    assert chain.mentions == [m1]
    assert chain.honorifics == {"mr"}
    assert chain.gender is None
    assert chain.max_sentence_offset == 7
    assert chain.entity_type == "PERSON"
    assert chain.identifier == 0

    m2 = Mention(
        "Dr. John Joseph Smith", "PERSON", {"dr"}, ["john", "joseph", "smith"], None, False
    )
    chain.add(m2, 9)
    assert set(chain.mentions) == {m1, m2}
    assert _classes(chain.matchers) == PURE_ENTITY_MATCHERS
    assert _classes(chain.killers) == KILLERS
    assert chain.honorifics == {"mr", "dr"}
    assert chain.gender is None
    assert chain.max_sentence_offset == 9

    m3 = Mention("He", "MALE_PRONOUN", set(), ["he"], "male", True)
    chain.add(m3, 9)
    assert set(chain.mentions) == {m1, m2, m3}
    assert chain.composition == ChainComposition.HAS_PRONOUN
    assert _classes(chain.matchers) == HAS_PRONOUN_MATCHERS
    assert _classes(chain.killers) == KILLERS
    assert chain.honorifics == {"mr", "dr"}
    assert chain.gender == Gender.MALE
    assert chain.max_sentence_offset == 9
    assert chain.entity_type == "PERSON"
    assert chain.identifier == 0

    assert MentionChain(m2, 17, 1, compositions).identifier == 1

    # male pronoun match
    m4 = Mention("He", "MALE_PRONOUN", set(), ["he"], "male", True)
    assert not chain.killed(m4)
    assert chain.match_score(m4) == weights.pronoun_entity_type

    # exact match
    m5 = Mention(
        "Dr. John Joseph Smith", "PERSON", {"dr"}, ["john", "joseph", "smith"], None, False
    )
    assert chain.match_score(m5) == weights.exact_phrase

    # no match
    m6 = Mention("she", "FEMALE_PRONOUN", set(), ["she"], None, True)
    assert chain.match_score(m6) == NO_MATCH

    # honorific conflict
    m7 = Mention("Mrs. Johanna Smith", "PERSON", {"mrs"}, ["johanna", "smith"], None, False)
    assert chain.killed(m7)
    assert chain.match_score(m7) == NO_MATCH

    # gender conflict
    m8 = Mention("Johanna Smith", "PERSON", set(), ["johanna", "smith"], "female", False)
    assert chain.killed(m8)


def test_chain_iteration():
    m1 = Mention("John", "PERSON", normal_tokens=["john"])
    m2 = Mention("he", "MALE_PRONOUN", normal_tokens=["he"], is_pronominal=True)
    chain = MentionChain(m1, 0, 0, default_compositions(CorefConfig()))
    chain.add(m2, 1)
    assert list(chain) == [m1, m2]
    mentions = chain.mentions
    mentions.clear()
    assert len(chain) == 2


def test_killed_mention_never_matches():
    chain = MentionChain(
        Mention("Mr. Smith", "PERSON", {"mr"}, ["smith"]),
        0,
        0,
        default_compositions(CorefConfig()),
    )
    # would be an exact match without the honorific conflict
    candidate = Mention("Mrs. Smith", "PERSON", {"mrs"}, ["smith"])
    assert chain.killed(candidate)
    assert chain.match_score(candidate) == NO_MATCH


def test_missing_composition():
    compositions = default_compositions(CorefConfig())
    del compositions[ChainComposition.HAS_PRONOUN]
    with pytest.raises(ValueError):
        MentionChain(Mention("John", "PERSON"), 0, 0, compositions)


mention_strategy = st.builds(
    Mention,
    phrase=st.just("x"),
    entity_type=st.sampled_from(["PERSON", "ORGANIZATION", "MALE_PRONOUN"]),
    honorifics=st.sets(st.sampled_from(["mr", "mrs", "dr"]), max_size=2),
    normal_tokens=st.lists(st.sampled_from(["a", "b", "c"]), max_size=4),
    gender=st.sampled_from([None, Gender.MALE, Gender.FEMALE, Gender.IT]),
    is_pronominal=st.booleans(),
)


@given(
    mention_strategy,
    st.lists(st.tuples(mention_strategy, st.integers(min_value=0, max_value=50))),
)
def test_chain_attributes_are_monotonic(
    first: Mention, additions: List[Tuple[Mention, int]]
):
    chain = MentionChain(first, 0, 0, default_compositions(CorefConfig()))
    entity_type = chain.entity_type

    for mention, offset in additions:
        prior_honorifics = chain.honorifics
        prior_offset = chain.max_sentence_offset
        prior_gender: Optional[Gender] = chain.gender

        chain.add(mention, offset)

        assert chain.honorifics >= prior_honorifics | mention.honorifics
        assert chain.max_sentence_offset == max(prior_offset, offset)
        if not prior_gender is None:
            assert chain.gender == prior_gender
        else:
            assert chain.gender == mention.gender
        assert chain.entity_type == entity_type
        assert mention in chain.mentions

        expected = (
            ChainComposition.HAS_PRONOUN
            if any(m.is_pronominal for m in chain.mentions)
            else ChainComposition.PURE_ENTITY
        )
        assert chain.composition == expected


@given(mention_strategy, mention_strategy)
def test_veto_precedence(member: Mention, candidate: Mention):
    chain = MentionChain(member, 0, 0, default_compositions(CorefConfig()))
    if chain.killed(candidate):
        assert chain.match_score(candidate) == NO_MATCH
