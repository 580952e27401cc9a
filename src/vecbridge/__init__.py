"""sqlite-vec support for SQLAlchemy applications.

Float32 vector codec, vec0 virtual table DDL, vector function and KNN
fragments, and DML statements for vec0 tables.
"""

from vecbridge.codec import deserialize_vector, serialize_vector
from vecbridge.dml import delete_vec0, insert_many_vec0, insert_vec0, update_vec0
from vecbridge.exceptions import (
    DimensionMismatchError,
    ExtensionLoadError,
    InvalidVectorError,
    NoRowsProvidedError,
    NoValuesProvidedError,
    VecBridgeError,
)
from vecbridge.expressions import (
    as_operand,
    knn_where,
    vec_add,
    vec_distance_cosine,
    vec_distance_l2,
    vec_f32,
    vec_length,
    vec_normalize,
    vec_quantize_binary,
    vec_quantize_i8,
    vec_slice,
    vec_sub,
    vec_to_json,
    vector_match,
    vector_to_sql,
)
from vecbridge.fragment import ColumnRef, Fragment, Nested, Operand, Statement, VectorLiteral
from vecbridge.schema import (
    ColumnKind,
    DistanceMetric,
    VecColumn,
    VecColumnBuilder,
    VirtualTable,
    shadow_vec0_table,
    vec0_table,
    vec_bit,
    vec_blob,
    vec_float,
    vec_int8,
    vec_integer,
    vec_text,
    vector_type,
)
from vecbridge.search import build_vector_search_query, build_vector_search_with_join
from vecbridge.types import Float32Vector
from vecbridge.vectors import (
    EMBEDDING_DIMENSIONS,
    cosine_distance,
    cosine_similarity,
    create_vector,
    dot_product,
    l2_distance,
    normalize_vector,
    random_vector,
    typed_vector,
    validate_vector,
    zero_vector,
)

__all__ = [
    "ColumnKind",
    "ColumnRef",
    "DimensionMismatchError",
    "DistanceMetric",
    "EMBEDDING_DIMENSIONS",
    "ExtensionLoadError",
    "Float32Vector",
    "Fragment",
    "InvalidVectorError",
    "Nested",
    "NoRowsProvidedError",
    "NoValuesProvidedError",
    "Operand",
    "Statement",
    "VecBridgeError",
    "VecColumn",
    "VecColumnBuilder",
    "VectorLiteral",
    "VirtualTable",
    "as_operand",
    "build_vector_search_query",
    "build_vector_search_with_join",
    "cosine_distance",
    "cosine_similarity",
    "create_vector",
    "delete_vec0",
    "deserialize_vector",
    "dot_product",
    "insert_many_vec0",
    "insert_vec0",
    "knn_where",
    "l2_distance",
    "normalize_vector",
    "random_vector",
    "serialize_vector",
    "shadow_vec0_table",
    "typed_vector",
    "update_vec0",
    "validate_vector",
    "vec0_table",
    "vec_add",
    "vec_bit",
    "vec_blob",
    "vec_distance_cosine",
    "vec_distance_l2",
    "vec_f32",
    "vec_float",
    "vec_int8",
    "vec_integer",
    "vec_length",
    "vec_normalize",
    "vec_quantize_binary",
    "vec_quantize_i8",
    "vec_slice",
    "vec_sub",
    "vec_text",
    "vec_to_json",
    "vector_match",
    "vector_to_sql",
    "vector_type",
    "zero_vector",
]
