"""Data contracts for logroute.

Pydantic models for the declarative resources (outputs, flows, filters,
conditions, secrets), the per-render PipelineSpec, and the error taxonomy.
"""

from logroute.contracts.conditions import (
    AndCondition,
    ConditionExpr,
    NotCondition,
    OrCondition,
    RegexpCondition,
    RegexpMatch,
)
from logroute.contracts.errors import (
    DanglingReferenceError,
    IdentifierCollisionError,
    MalformedExpressionError,
    MissingSpecError,
    RenderError,
    SecretResolutionError,
)
from logroute.contracts.filters import (
    FilterSpec,
    GroupUnsetConfig,
    GroupUnsetRule,
    MatchFilter,
    ParserConfig,
    ParserFilter,
    RegexpParser,
    RegexpParserConfig,
    RenameConfig,
    RenameRule,
    RewriteFilter,
    RewriteRule,
    SetConfig,
    SetRule,
    SubstConfig,
    SubstRule,
    SyslogParser,
    SyslogParserConfig,
    UnsetConfig,
    UnsetRule,
)
from logroute.contracts.outputs import (
    BatchOptions,
    Destination,
    DiskBuffer,
    FileOutput,
    HTTPOutput,
    MongoDBOutput,
    OutputSpec,
    RawString,
    RedisOutput,
    SyslogOutput,
    TLSOptions,
    ValuePairs,
)
from logroute.contracts.pipeline import (
    ClusterFlowSpec,
    FlowSpec,
    GlobalOptions,
    PipelineDocument,
    PipelineSpec,
    SyslogNGSpec,
)
from logroute.contracts.secrets import (
    MountedSecret,
    SecretKeySelector,
    SecretRef,
    SecretResolver,
    SecretResolverFactory,
    SecretSource,
)

__all__ = [
    # conditions
    "AndCondition",
    "ConditionExpr",
    "NotCondition",
    "OrCondition",
    "RegexpCondition",
    "RegexpMatch",
    # errors
    "DanglingReferenceError",
    "IdentifierCollisionError",
    "MalformedExpressionError",
    "MissingSpecError",
    "RenderError",
    "SecretResolutionError",
    # filters
    "FilterSpec",
    "GroupUnsetConfig",
    "GroupUnsetRule",
    "MatchFilter",
    "ParserConfig",
    "ParserFilter",
    "RegexpParser",
    "RegexpParserConfig",
    "RenameConfig",
    "RenameRule",
    "RewriteFilter",
    "RewriteRule",
    "SetConfig",
    "SetRule",
    "SubstConfig",
    "SubstRule",
    "SyslogParser",
    "SyslogParserConfig",
    "UnsetConfig",
    "UnsetRule",
    # outputs
    "BatchOptions",
    "Destination",
    "DiskBuffer",
    "FileOutput",
    "HTTPOutput",
    "MongoDBOutput",
    "OutputSpec",
    "RawString",
    "RedisOutput",
    "SyslogOutput",
    "TLSOptions",
    "ValuePairs",
    # pipeline
    "ClusterFlowSpec",
    "FlowSpec",
    "GlobalOptions",
    "PipelineDocument",
    "PipelineSpec",
    "SyslogNGSpec",
    # secrets
    "MountedSecret",
    "SecretKeySelector",
    "SecretRef",
    "SecretResolver",
    "SecretResolverFactory",
    "SecretSource",
]
