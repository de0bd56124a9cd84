# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.14.7
#   kernelspec:
#     display_name: Python 3 (ipykernel)
#     language: python
#     name: python3
# ---

# %% [markdown]
# # corefchains : within-document coreference resolution
#
# `corefchains` clusters the mentions of a document into chains of
# mentions referring to the same entity. Mentions are given in reading
# order, as `(phrase, entity type, sentence offset)` triples, and each
# mention receives the identifier of its chain.
#
# ```
#   mentions (phrase, entity type, sentence offset)
#                 |
#                 v
#          [MentionFactory]   honorifics, pronouns, normal tokens
#                 |
#                 v
#          [WithinDocCoref]   matchers, killers, chains
#                 |
#                 v
#          chain identifiers
# ```

# %% [markdown]
# # Resolving a Document

# %%
from corefchains import WithinDocCoref

coref = WithinDocCoref()
ids = coref.resolve_document(
    [
        ("Mr. John Smith", "PERSON", 1),
        ("John Smith", "PERSON", 2),
        ("Johanna Smith", "PERSON", 3),
        ("he", "MALE_PRONOUN", 3),
        ("IBM", "ORGANIZATION", 3),
    ]
)
print(ids)

# %% [markdown]
# Each chain keeps the honorifics, gender and last sentence offset of
# its mentions:

# %%
for chain in coref.mention_chains:
    print(chain, [m.phrase for m in chain.mentions])

# %% [markdown]
# # Configuration
#
# Honorifics and pronouns tables, matchers weights and the minimum
# shared run of tokens of the `SequenceSubstringMatch` are given using
# a `CorefConfig`. Default tables exist for english (`eng`) and french
# (`fra`).

# %%
from corefchains import CorefConfig, MatcherWeights, MentionFactory

config = CorefConfig.for_lang(
    "eng",
    # a shared run of 2 tokens is enough to link two mentions
    min_run=2,
    weights=MatcherWeights(exact_phrase=5),
    # organizations can't be referred to by "he" or "she"
    entity_type_genders={"ORGANIZATION": "it"},
)
factory = MentionFactory(config)

# synonyms are registered between normal phrases (lowercased tokens,
# honorifics excluded)
factory.add_synonym("big blue", "ibm")

coref = WithinDocCoref(factory)
print(
    coref.resolve_document(
        [
            ("IBM", "ORGANIZATION", 0),
            ("he", "MALE_PRONOUN", 0),
            ("Big Blue", "ORGANIZATION", 1),
        ]
    )
)

# %% [markdown]
# # Pipeline Usage
#
# Resolution is also available as a pipeline step. Mentions are given
# to the pipeline at runtime.

# %%
from corefchains.pipeline import Pipeline, WithinDocCoreferenceResolver

pipeline = Pipeline([WithinDocCoreferenceResolver()], lang="fra")
out = pipeline(
    coref_mentions=[
        ("Madame Bovary", "PERSON", 0),
        ("Emma Bovary", "PERSON", 1),
        ("elle", "FEMALE_PRONOUN", 1),
    ]
)
print(out.coref_chain_ids)
print(out.get_chain_of("elle"))
