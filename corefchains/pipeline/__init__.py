from corefchains.pipeline.core import (
    Pipeline,
    PipelineStep,
    PipelineState,
    MentionTriple,
    check_mentions,
)
from corefchains.pipeline.progress import ProgressReporter, get_progress_reporter
from corefchains.pipeline.corefs import WithinDocCoreferenceResolver
