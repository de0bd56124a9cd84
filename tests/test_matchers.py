from typing import List
import pytest
from hypothesis import given
import hypothesis.strategies as st
from corefchains.coref import (
    NO_MATCH,
    CorefConfig,
    Mention,
    MentionChain,
    ExactPhraseMatch,
    SequenceSubstringMatch,
    SynonymMatch,
    EntityTypeMatch,
    GenderKiller,
    HonorificConflictKiller,
    default_compositions,
)


def _chain(mention: Mention, offset: int = 0) -> MentionChain:
    return MentionChain(mention, offset, 0, default_compositions(CorefConfig()))


def _mention(tokens: List[str], entity_type: str = "PERSON", **kwargs) -> Mention:
    return Mention(" ".join(tokens), entity_type, normal_tokens=tokens, **kwargs)


def test_exact_phrase_match():
    matcher = ExactPhraseMatch(2)
    chain = _chain(_mention(["john", "smith"]))
    assert matcher.match(_mention(["john", "smith"]), chain) == 2
    assert matcher.match(_mention(["smith", "john"]), chain) == NO_MATCH
    assert matcher.match(_mention(["john"]), chain) == NO_MATCH
    chain.add(_mention(["john"]), 1)
    assert matcher.match(_mention(["john"]), chain) == 2


def test_empty_mentions_never_match_exactly():
    matcher = ExactPhraseMatch(2)
    chain = _chain(_mention([]))
    assert matcher.match(_mention([]), chain) == NO_MATCH
    assert matcher.match(_mention([], "ORGANIZATION"), chain) == NO_MATCH


def test_synonym_match():
    m1 = Mention(
        "Mr. John Smith", "PERSON", {"mr"}, ["john", "smith"], None, False
    )
    chain = _chain(m1, 7)
    m2 = Mention("John Smith", "ORGANIZATION", {"mr"}, ["johan", "smith"], None, False)

    matcher = SynonymMatch(1)
    assert matcher.match(m2, chain) == NO_MATCH

    matcher.add_synonym("john smith", "johan smith")
    assert matcher.match(m2, chain) == 1

    matcher.remove_synonym("johan smith", "john smith")
    assert matcher.match(m2, chain) == NO_MATCH

    matcher.add_synonym("john smith", "johan smith")
    assert matcher.match(m2, chain) == 1

    matcher.clear_synonyms()
    assert matcher.match(m2, chain) == NO_MATCH


def test_synonyms_are_symmetric():
    matcher = SynonymMatch(1)
    matcher.add_synonym("a", "b")
    assert matcher.are_synonyms("a", "b")
    assert matcher.are_synonyms("b", "a")
    matcher.remove_synonym("b", "a")
    assert not matcher.are_synonyms("a", "b")
    # removing an unknown synonymy is a no-op
    matcher.remove_synonym("c", "d")


def test_sequence_substring_match():
    matcher = SequenceSubstringMatch(5, min_run=3)
    chain = _chain(_mention(["a", "b", "c", "d", "e"]))

    assert matcher.match(_mention(["a", "b", "c", "d"]), chain) == 5
    assert matcher.match(_mention(["c", "d", "e", "f"]), chain) == 5
    assert matcher.match(_mention(["a", "b"]), chain) == NO_MATCH
    assert matcher.match(_mention(["a", "c", "e"]), chain) == NO_MATCH

    assert matcher.match(_mention(["d"]), chain) == NO_MATCH
    chain.add(_mention(["d"]), 1)
    assert matcher.match(_mention(["d"]), chain) == 5


def test_sequence_substring_match_short_sequences():
    matcher = SequenceSubstringMatch(1, min_run=3)
    chain = _chain(_mention(["john", "smith"]))
    assert matcher.match(_mention(["john", "smith"]), chain) == 1
    assert matcher.match(_mention(["johanna", "smith"]), chain) == NO_MATCH
    assert matcher.match(_mention([]), chain) == NO_MATCH


@given(
    st.lists(st.sampled_from("abcdef"), min_size=1, max_size=8),
    st.integers(min_value=1, max_value=4),
)
def test_sequence_substring_matches_itself(tokens: List[str], min_run: int):
    matcher = SequenceSubstringMatch(1, min_run=min_run)
    chain = _chain(_mention(tokens))
    assert matcher.match(_mention(tokens), chain) == 1


def test_entity_type_match():
    matcher = EntityTypeMatch(3, "MALE_PRONOUN")
    chain = _chain(_mention(["john", "smith"]))
    he = Mention("he", "MALE_PRONOUN", normal_tokens=["he"], gender="male", is_pronominal=True)
    she = Mention("she", "FEMALE_PRONOUN", normal_tokens=["she"], gender="female", is_pronominal=True)
    assert matcher.match(he, chain) == 3
    assert matcher.match(she, chain) == NO_MATCH


def test_entity_type_match_chain_types():
    matcher = EntityTypeMatch(3, "MALE_PRONOUN", {"PERSON"})
    he = Mention("he", "MALE_PRONOUN", normal_tokens=["he"], gender="male", is_pronominal=True)
    assert matcher.match(he, _chain(_mention(["john", "smith"]))) == 3
    assert matcher.match(he, _chain(_mention(["ibm"], "ORGANIZATION"))) == NO_MATCH


def test_organization_chain_ignores_pronoun_types():
    chain = _chain(_mention(["ibm"], "ORGANIZATION"))
    he = Mention("he", "MALE_PRONOUN", normal_tokens=["he"], gender="male", is_pronominal=True)
    assert chain.match_score(he) == NO_MATCH
    assert _chain(_mention(["john"])).match_score(he) == CorefConfig().weights.entity_type


def test_chain_relative_entity_type_match():
    matcher = EntityTypeMatch(2)
    chain = _chain(_mention(["john", "smith"]))
    he = Mention("he", "MALE_PRONOUN", normal_tokens=["he"], gender="male", is_pronominal=True)
    him = Mention("him", "MALE_PRONOUN", normal_tokens=["him"], gender="male", is_pronominal=True)
    assert matcher.match(he, chain) == NO_MATCH
    chain.add(he, 1)
    assert matcher.match(him, chain) == 2
    assert matcher.match(_mention(["john"]), chain) == NO_MATCH


def test_gender_killer():
    killer = GenderKiller()
    chain = _chain(_mention(["john"], gender="male"))
    assert chain.gender == "male"
    assert killer.kill(_mention(["mary"], gender="female"), chain)
    assert not killer.kill(_mention(["john"]), chain)
    assert not killer.kill(_mention(["john"], gender="male"), chain)

    unknown_chain = _chain(_mention(["john"]))
    assert not killer.kill(_mention(["mary"], gender="female"), unknown_chain)


def test_honorific_conflict_killer():
    killer = HonorificConflictKiller()
    chain = _chain(_mention(["smith"], honorifics={"mr"}))
    assert killer.kill(_mention(["smith"], honorifics={"mrs"}), chain)
    assert not killer.kill(_mention(["smith"], honorifics={"mrs", "mr"}), chain)
    assert not killer.kill(_mention(["smith"]), chain)
    assert not killer.kill(_mention(["smith"], honorifics={"mrs"}), _chain(_mention(["smith"])))


@pytest.mark.parametrize("score", [0, -1, 1.5, True, "1"])
def test_invalid_matcher_score(score):
    with pytest.raises(ValueError):
        ExactPhraseMatch(score)


@pytest.mark.parametrize("min_run", [0, -2, 2.0])
def test_invalid_min_run(min_run):
    with pytest.raises(ValueError):
        SequenceSubstringMatch(1, min_run=min_run)
