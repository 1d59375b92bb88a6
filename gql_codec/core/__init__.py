"""Core modules for building GraphQL selections together with their decoders."""

from . import decoders, directives
from .arguments import (
    ArgumentValue,
    InlineBool,
    InlineEnum,
    InlineFloat,
    InlineInt,
    InlineList,
    InlineNull,
    InlineObject,
    InlineString,
    Variable,
    inline,
    variable,
)
from .builder import (
    ObjectBuilder,
    build,
    field,
    field_as,
    inline_fragment,
    object_,
)
from .directives import Directive
from .errors import (
    DecodeError,
    DecodeFailure,
    GraphQLClientError,
    GraphQLError,
    HttpError,
    InvalidJsonError,
    NetworkError,
    ServerError,
)
from .executor import build_request, classify_response, send, send_async
from .fields import (
    Field,
    bool_,
    float_,
    id_,
    int_,
    json_,
    list_,
    optional,
    scalar,
    string,
    typename,
)
from .fragments import Fragment, on, spread
from .operation import (
    Operation,
    OperationBuilder,
    OperationKind,
    VariableDefinition,
    mutation,
    query,
)
from .scalars import (
    DateHandler,
    DateTimeHandler,
    JSONHandler,
    ScalarHandler,
    UUIDHandler,
)
from .selection import (
    FragmentSpread,
    InlineFragment,
    Object,
    PhantomRoot,
    Scalar,
    SelectionVariant,
)
from .transport import (
    AsyncHttpxTransport,
    AsyncTransport,
    HttpRequest,
    HttpResponse,
    HttpxTransport,
    Transport,
)

__all__ = [
    # Modules
    "decoders",
    "directives",
    # Arguments
    "ArgumentValue",
    "InlineBool",
    "InlineEnum",
    "InlineFloat",
    "InlineInt",
    "InlineList",
    "InlineNull",
    "InlineObject",
    "InlineString",
    "Variable",
    "inline",
    "variable",
    "Directive",
    # Fields
    "Field",
    "bool_",
    "float_",
    "id_",
    "int_",
    "json_",
    "list_",
    "optional",
    "scalar",
    "string",
    "typename",
    # Objects
    "ObjectBuilder",
    "build",
    "field",
    "field_as",
    "inline_fragment",
    "object_",
    # Fragments
    "Fragment",
    "on",
    "spread",
    # Operations
    "Operation",
    "OperationBuilder",
    "OperationKind",
    "VariableDefinition",
    "mutation",
    "query",
    # Selection variants
    "FragmentSpread",
    "InlineFragment",
    "Object",
    "PhantomRoot",
    "Scalar",
    "SelectionVariant",
    # Scalars
    "ScalarHandler",
    "DateTimeHandler",
    "DateHandler",
    "UUIDHandler",
    "JSONHandler",
    # Transport
    "HttpRequest",
    "HttpResponse",
    "Transport",
    "AsyncTransport",
    "HttpxTransport",
    "AsyncHttpxTransport",
    # Executor
    "build_request",
    "classify_response",
    "send",
    "send_async",
    # Errors
    "GraphQLClientError",
    "NetworkError",
    "HttpError",
    "GraphQLError",
    "InvalidJsonError",
    "DecodeError",
    "DecodeFailure",
    "ServerError",
]
