"""
Rustdoc JSON Data Models

This module defines the data classes representing a rustdoc JSON document.
These classes provide a typed, in-memory representation of a crate's public
API: the item index, external path summaries and external crate table.

The rustdoc format uses externally tagged unions: a variant is either a bare
string (``"unit"``, ``"infer"``, ``"public"``) or a single-key object
(``{"struct": {...}}``, ``{"primitive": "i32"}``). Every union modelled here
has an explicit Unknown variant so that documents produced by newer or older
rustdoc releases parse instead of being rejected. Fields we do not model are
ignored.

Based on the rustdoc JSON format (format versions 28 through 50+):
https://github.com/rust-lang/rust/blob/master/src/rustdoc-json-types/lib.rs
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .constants import ExtractionDefaults


# =============================================================================
# Wire helpers
# =============================================================================

def parse_id(value: Any) -> str:
    """
    Normalize a rustdoc item ID to its string form.

    Format versions before 35 use string IDs (``"0:12:345"``); later versions
    use integers. Both map to the same internal representation.

    Raises:
        ValueError: If the value is neither a string nor an integer.
    """
    if isinstance(value, bool):
        raise ValueError("Expected string or integer ID, got bool")
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    raise ValueError(f"Expected string or integer ID, got {type(value).__name__}")


def _optional_id(value: Any) -> Optional[str]:
    if value is None:
        return None
    try:
        return parse_id(value)
    except ValueError:
        return None


def _id_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [i for i in (_optional_id(v) for v in value) if i is not None]


def _optional_id_list(value: Any) -> List[Optional[str]]:
    """ID list where stripped entries are ``null`` (tuple struct fields)."""
    if not isinstance(value, list):
        return []
    return [_optional_id(v) for v in value]


def _list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    return value if isinstance(value, list) else []


def _bool(data: Dict[str, Any], *keys: str) -> bool:
    for key in keys:
        if key in data:
            return bool(data[key])
    return False


def _str(data: Dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str):
            return value
    return None


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def split_tag(value: Any) -> Tuple[Optional[str], Any]:
    """
    Split an externally tagged union value into ``(tag, payload)``.

    ``"unit"`` becomes ``("unit", None)`` and ``{"tuple": [...]}`` becomes
    ``("tuple", [...])``. Anything else yields ``(None, None)``.
    """
    if isinstance(value, str):
        return value, None
    if isinstance(value, dict) and len(value) == 1:
        tag, payload = next(iter(value.items()))
        return tag, payload
    return None, None


# =============================================================================
# Enumerations
# =============================================================================

class VisibilityKind(str, Enum):
    """Rustdoc visibility tags."""
    PUBLIC = "public"
    DEFAULT = "default"
    CRATE = "crate"
    RESTRICTED = "restricted"


class ItemKind(str, Enum):
    """Item kinds as reported in the ``paths`` summary table."""
    MODULE = "module"
    EXTERN_CRATE = "extern_crate"
    USE = "use"
    STRUCT = "struct"
    STRUCT_FIELD = "struct_field"
    UNION = "union"
    ENUM = "enum"
    VARIANT = "variant"
    FUNCTION = "function"
    TYPE_ALIAS = "type_alias"
    CONSTANT = "constant"
    TRAIT = "trait"
    TRAIT_ALIAS = "trait_alias"
    IMPL = "impl"
    STATIC = "static"
    EXTERN_TYPE = "extern_type"
    MACRO = "macro"
    PROC_ATTRIBUTE = "proc_attribute"
    PROC_DERIVE = "proc_derive"
    ASSOC_CONST = "assoc_const"
    ASSOC_TYPE = "assoc_type"
    PRIMITIVE = "primitive"
    KEYWORD = "keyword"
    UNKNOWN = "unknown"

    @classmethod
    def from_json(cls, value: Any) -> 'ItemKind':
        """Parse a kind tag, mapping unrecognized tags to UNKNOWN."""
        if value == "typedef":
            return cls.TYPE_ALIAS
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class FieldLayout(str, Enum):
    """Layout of a struct body or an enum variant."""
    UNIT = "unit"
    PLAIN = "plain"
    TUPLE = "tuple"
    STRUCT = "struct"


# =============================================================================
# Types
# =============================================================================

@dataclass
class ResolvedPath:
    """
    A path to a named item, optionally with generic arguments.

    Attributes:
        path: The path as written (``"Vec"``, ``"std::io::Error"``).
            Read from ``name`` in older format versions.
        id: The referenced item's ID, when rustdoc resolved it
        args: Generic arguments applied to the path
    """
    path: str = ""
    id: Optional[str] = None
    args: Optional['GenericArgs'] = None

    @classmethod
    def from_json(cls, data: Any) -> 'ResolvedPath':
        data = _dict(data)
        args = data.get("args")
        return cls(
            path=_str(data, "path", "name") or "",
            id=_optional_id(data.get("id")),
            args=parse_generic_args(args) if args is not None else None,
        )


@dataclass
class PrimitiveType:
    name: str


@dataclass
class TupleType:
    elements: List['RustType'] = field(default_factory=list)


@dataclass
class SliceType:
    element: 'RustType'


@dataclass
class ArrayType:
    element: 'RustType'
    length: str = ""


@dataclass
class RawPointerType:
    target: 'RustType'
    is_mutable: bool = False


@dataclass
class BorrowedRefType:
    target: 'RustType'
    is_mutable: bool = False
    lifetime: Optional[str] = None


@dataclass
class FunctionPointerType:
    sig: 'FunctionSignature'
    generic_params: List['GenericParamDef'] = field(default_factory=list)
    header: 'FunctionHeader' = field(default_factory=lambda: FunctionHeader())


@dataclass
class QualifiedPathType:
    """``<Self as Trait>::Name``"""
    name: str
    self_type: 'RustType'
    trait: Optional[ResolvedPath] = None
    args: Optional['GenericArgs'] = None


@dataclass
class ImplTraitType:
    bounds: List['GenericBound'] = field(default_factory=list)


@dataclass
class PolyTrait:
    """A trait inside a ``dyn`` object, possibly with higher-ranked lifetimes."""
    trait: ResolvedPath
    generic_params: List['GenericParamDef'] = field(default_factory=list)


@dataclass
class DynTraitType:
    traits: List[PolyTrait] = field(default_factory=list)
    lifetime: Optional[str] = None


@dataclass
class InferType:
    """The ``_`` placeholder."""


@dataclass
class GenericType:
    """A reference to a generic type parameter such as ``T``."""
    name: str


@dataclass
class UnknownType:
    """Catch-all for type kinds this model does not recognize."""
    tag: Optional[str] = None


RustType = Union[
    ResolvedPath,
    PrimitiveType,
    TupleType,
    SliceType,
    ArrayType,
    RawPointerType,
    BorrowedRefType,
    FunctionPointerType,
    QualifiedPathType,
    ImplTraitType,
    DynTraitType,
    InferType,
    GenericType,
    UnknownType,
]


def _parse_poly_trait(data: Any) -> PolyTrait:
    data = _dict(data)
    return PolyTrait(
        trait=ResolvedPath.from_json(data.get("trait")),
        generic_params=[GenericParamDef.from_json(p) for p in _list(data, "generic_params")],
    )


def _parse_dyn_trait(payload: Any) -> DynTraitType:
    payload = _dict(payload)
    return DynTraitType(
        traits=[_parse_poly_trait(t) for t in _list(payload, "traits")],
        lifetime=_str(payload, "lifetime"),
    )


def _parse_array(payload: Any) -> ArrayType:
    payload = _dict(payload)
    length = payload.get("len", "")
    return ArrayType(element=parse_type(payload.get("type")), length=str(length))


def _parse_qualified_path(payload: Any) -> QualifiedPathType:
    payload = _dict(payload)
    trait = payload.get("trait")
    args = payload.get("args")
    return QualifiedPathType(
        name=_str(payload, "name") or "",
        self_type=parse_type(payload.get("self_type")),
        trait=ResolvedPath.from_json(trait) if trait is not None else None,
        args=parse_generic_args(args) if args is not None else None,
    )


def _parse_function_pointer(payload: Any) -> FunctionPointerType:
    payload = _dict(payload)
    return FunctionPointerType(
        sig=FunctionSignature.from_json(payload.get("sig", payload.get("decl"))),
        generic_params=[GenericParamDef.from_json(p) for p in _list(payload, "generic_params")],
        header=FunctionHeader.from_json(payload.get("header")),
    )


_TYPE_PARSERS: Dict[str, Callable[[Any], RustType]] = {
    "resolved_path": ResolvedPath.from_json,
    "primitive": lambda p: PrimitiveType(name=p if isinstance(p, str) else ""),
    "tuple": lambda p: TupleType(elements=[parse_type(t) for t in p] if isinstance(p, list) else []),
    "slice": lambda p: SliceType(element=parse_type(p)),
    "array": _parse_array,
    "raw_pointer": lambda p: RawPointerType(
        target=parse_type(_dict(p).get("type")),
        is_mutable=_bool(_dict(p), "is_mutable", "mutable"),
    ),
    "borrowed_ref": lambda p: BorrowedRefType(
        target=parse_type(_dict(p).get("type")),
        is_mutable=_bool(_dict(p), "is_mutable", "mutable"),
        lifetime=_str(_dict(p), "lifetime"),
    ),
    "function_pointer": _parse_function_pointer,
    "qualified_path": _parse_qualified_path,
    "impl_trait": lambda p: ImplTraitType(bounds=[parse_generic_bound(b) for b in p] if isinstance(p, list) else []),
    "dyn_trait": _parse_dyn_trait,
    "infer": lambda p: InferType(),
    "generic": lambda p: GenericType(name=p if isinstance(p, str) else ""),
}


def parse_type(data: Any) -> RustType:
    """Parse a type reference; unrecognized shapes become ``UnknownType``."""
    tag, payload = split_tag(data)
    parser = _TYPE_PARSERS.get(tag) if tag is not None else None
    if parser is None:
        return UnknownType(tag=tag)
    return parser(payload)


# =============================================================================
# Generics
# =============================================================================

@dataclass
class LifetimeArg:
    name: str


@dataclass
class TypeArg:
    type: RustType


@dataclass
class ConstArg:
    value: Optional[str] = None
    expr: Optional[str] = None
    is_literal: bool = False


@dataclass
class InferArg:
    pass


@dataclass
class UnknownArg:
    tag: Optional[str] = None


GenericArg = Union[LifetimeArg, TypeArg, ConstArg, InferArg, UnknownArg]


def parse_generic_arg(data: Any) -> GenericArg:
    tag, payload = split_tag(data)
    if tag == "lifetime":
        return LifetimeArg(name=payload if isinstance(payload, str) else "")
    if tag == "type":
        return TypeArg(type=parse_type(payload))
    if tag == "const":
        payload = _dict(payload)
        return ConstArg(
            value=_str(payload, "value"),
            expr=_str(payload, "expr"),
            is_literal=_bool(payload, "is_literal"),
        )
    if tag == "infer":
        return InferArg()
    return UnknownArg(tag=tag)


@dataclass
class TypeBinding:
    """An associated item constraint, e.g. ``Iterator<Item = T>``."""
    name: str
    args: Optional['GenericArgs'] = None
    equality: Optional[RustType] = None
    bounds: List['GenericBound'] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> 'TypeBinding':
        data = _dict(data)
        args = data.get("args")
        binding_tag, binding = split_tag(data.get("binding"))
        equality = None
        bounds: List[GenericBound] = []
        if binding_tag == "equality":
            # Newer formats wrap the term: {"type": ...} or {"constant": ...}
            term_tag, term = split_tag(binding)
            if term_tag == "type":
                equality = parse_type(term)
            elif term_tag != "constant":
                equality = parse_type(binding)
        elif binding_tag == "constraint" and isinstance(binding, list):
            bounds = [parse_generic_bound(b) for b in binding]
        return cls(
            name=_str(data, "name") or "",
            args=parse_generic_args(args) if args is not None else None,
            equality=equality,
            bounds=bounds,
        )


@dataclass
class AngleBracketedArgs:
    args: List[GenericArg] = field(default_factory=list)
    constraints: List[TypeBinding] = field(default_factory=list)


@dataclass
class ParenthesizedArgs:
    """``Fn(A, B) -> C`` style arguments."""
    inputs: List[RustType] = field(default_factory=list)
    output: Optional[RustType] = None


@dataclass
class UnknownArgs:
    tag: Optional[str] = None


GenericArgs = Union[AngleBracketedArgs, ParenthesizedArgs, UnknownArgs]


def parse_generic_args(data: Any) -> GenericArgs:
    tag, payload = split_tag(data)
    if tag == "angle_bracketed":
        payload = _dict(payload)
        return AngleBracketedArgs(
            args=[parse_generic_arg(a) for a in _list(payload, "args")],
            constraints=[
                TypeBinding.from_json(c)
                for c in _list(payload, "constraints") or _list(payload, "bindings")
            ],
        )
    if tag == "parenthesized":
        payload = _dict(payload)
        output = payload.get("output")
        return ParenthesizedArgs(
            inputs=[parse_type(t) for t in _list(payload, "inputs")],
            output=parse_type(output) if output is not None else None,
        )
    return UnknownArgs(tag=tag)


@dataclass
class TraitBound:
    trait: ResolvedPath
    modifier: str = "none"
    generic_params: List['GenericParamDef'] = field(default_factory=list)


@dataclass
class OutlivesBound:
    lifetime: str


@dataclass
class UseBound:
    """Precise capturing bound, ``use<'a, T>``."""
    params: List[Any] = field(default_factory=list)


@dataclass
class UnknownBound:
    tag: Optional[str] = None


GenericBound = Union[TraitBound, OutlivesBound, UseBound, UnknownBound]


def parse_generic_bound(data: Any) -> GenericBound:
    tag, payload = split_tag(data)
    if tag == "trait_bound":
        payload = _dict(payload)
        modifier = payload.get("modifier")
        return TraitBound(
            trait=ResolvedPath.from_json(payload.get("trait")),
            modifier=modifier if isinstance(modifier, str) else "none",
            generic_params=[GenericParamDef.from_json(p) for p in _list(payload, "generic_params")],
        )
    if tag == "outlives":
        return OutlivesBound(lifetime=payload if isinstance(payload, str) else "")
    if tag == "use":
        return UseBound(params=payload if isinstance(payload, list) else [])
    return UnknownBound(tag=tag)


@dataclass
class LifetimeParam:
    outlives: List[str] = field(default_factory=list)


@dataclass
class TypeParam:
    bounds: List[GenericBound] = field(default_factory=list)
    default: Optional[RustType] = None
    is_synthetic: bool = False


@dataclass
class ConstParam:
    type: RustType = field(default_factory=UnknownType)
    default: Optional[str] = None


@dataclass
class UnknownParam:
    tag: Optional[str] = None


GenericParamKind = Union[LifetimeParam, TypeParam, ConstParam, UnknownParam]


def parse_generic_param_kind(data: Any) -> GenericParamKind:
    tag, payload = split_tag(data)
    payload = _dict(payload)
    if tag == "lifetime":
        return LifetimeParam(outlives=[o for o in _list(payload, "outlives") if isinstance(o, str)])
    if tag == "type":
        default = payload.get("default")
        return TypeParam(
            bounds=[parse_generic_bound(b) for b in _list(payload, "bounds")],
            default=parse_type(default) if default is not None else None,
            is_synthetic=_bool(payload, "is_synthetic", "synthetic"),
        )
    if tag == "const":
        return ConstParam(type=parse_type(payload.get("type")), default=_str(payload, "default"))
    return UnknownParam(tag=tag)


@dataclass
class GenericParamDef:
    name: str
    kind: GenericParamKind = field(default_factory=UnknownParam)

    @classmethod
    def from_json(cls, data: Any) -> 'GenericParamDef':
        data = _dict(data)
        return cls(name=_str(data, "name") or "", kind=parse_generic_param_kind(data.get("kind")))


@dataclass
class BoundPredicate:
    type: RustType
    bounds: List[GenericBound] = field(default_factory=list)
    generic_params: List[GenericParamDef] = field(default_factory=list)


@dataclass
class LifetimePredicate:
    lifetime: str
    outlives: List[str] = field(default_factory=list)


@dataclass
class EqPredicate:
    lhs: RustType
    rhs: Optional[RustType] = None


@dataclass
class UnknownPredicate:
    tag: Optional[str] = None


WherePredicate = Union[BoundPredicate, LifetimePredicate, EqPredicate, UnknownPredicate]


def parse_where_predicate(data: Any) -> WherePredicate:
    tag, payload = split_tag(data)
    payload = _dict(payload)
    if tag == "bound_predicate":
        return BoundPredicate(
            type=parse_type(payload.get("type")),
            bounds=[parse_generic_bound(b) for b in _list(payload, "bounds")],
            generic_params=[GenericParamDef.from_json(p) for p in _list(payload, "generic_params")],
        )
    if tag == "lifetime_predicate":
        return LifetimePredicate(
            lifetime=_str(payload, "lifetime") or "",
            outlives=[o for o in _list(payload, "outlives") if isinstance(o, str)],
        )
    if tag == "eq_predicate":
        return EqPredicate(lhs=parse_type(payload.get("lhs")), rhs=parse_type(payload.get("rhs")))
    return UnknownPredicate(tag=tag)


@dataclass
class Generics:
    params: List[GenericParamDef] = field(default_factory=list)
    where_predicates: List[WherePredicate] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> 'Generics':
        data = _dict(data)
        return cls(
            params=[GenericParamDef.from_json(p) for p in _list(data, "params")],
            where_predicates=[parse_where_predicate(w) for w in _list(data, "where_predicates")],
        )

    @property
    def has_type_params(self) -> bool:
        """True when at least one type (not lifetime/const) parameter is declared."""
        return any(isinstance(p.kind, TypeParam) for p in self.params)


# =============================================================================
# Functions
# =============================================================================

@dataclass
class FunctionSignature:
    """
    Function signature.

    Attributes:
        inputs: Ordered ``(name, type)`` pairs, including any ``self`` receiver
        output: Return type, ``None`` for ``()``
        is_c_variadic: Whether the function ends in ``...``
    """
    inputs: List[Tuple[str, RustType]] = field(default_factory=list)
    output: Optional[RustType] = None
    is_c_variadic: bool = False

    @classmethod
    def from_json(cls, data: Any) -> 'FunctionSignature':
        data = _dict(data)
        inputs: List[Tuple[str, RustType]] = []
        for entry in _list(data, "inputs"):
            if isinstance(entry, list) and len(entry) == 2:
                name = entry[0] if isinstance(entry[0], str) else ""
                inputs.append((name, parse_type(entry[1])))
        output = data.get("output")
        return cls(
            inputs=inputs,
            output=parse_type(output) if output is not None else None,
            is_c_variadic=_bool(data, "is_c_variadic", "c_variadic"),
        )


@dataclass
class FunctionHeader:
    is_const: bool = False
    is_unsafe: bool = False
    is_async: bool = False
    abi: Any = None

    @classmethod
    def from_json(cls, data: Any) -> 'FunctionHeader':
        data = _dict(data)
        return cls(
            is_const=_bool(data, "is_const", "const"),
            is_unsafe=_bool(data, "is_unsafe", "unsafe"),
            is_async=_bool(data, "is_async", "async"),
            abi=data.get("abi"),
        )


# =============================================================================
# Item kinds
# =============================================================================

@dataclass
class ModuleItem:
    items: List[str] = field(default_factory=list)
    is_stripped: bool = False
    is_crate: bool = False


@dataclass
class StructKind:
    """
    Struct body layout.

    ``fields`` holds the field item IDs; tuple structs may contain ``None``
    entries for fields stripped from the documentation.
    """
    layout: FieldLayout = FieldLayout.UNIT
    fields: List[Optional[str]] = field(default_factory=list)
    has_stripped_fields: bool = False

    @classmethod
    def from_json(cls, data: Any) -> 'StructKind':
        tag, payload = split_tag(data)
        if tag == "tuple":
            return cls(layout=FieldLayout.TUPLE, fields=_optional_id_list(payload))
        if tag == "plain":
            payload = _dict(payload)
            return cls(
                layout=FieldLayout.PLAIN,
                fields=list(_id_list(payload.get("fields"))),
                has_stripped_fields=_bool(payload, "has_stripped_fields", "fields_stripped"),
            )
        return cls()


@dataclass
class StructItem:
    kind: StructKind = field(default_factory=StructKind)
    generics: Generics = field(default_factory=Generics)
    impls: List[str] = field(default_factory=list)


@dataclass
class UnionItem:
    generics: Generics = field(default_factory=Generics)
    fields: List[str] = field(default_factory=list)
    has_stripped_fields: bool = False
    impls: List[str] = field(default_factory=list)


@dataclass
class EnumItem:
    generics: Generics = field(default_factory=Generics)
    variants: List[str] = field(default_factory=list)
    variants_stripped: bool = False
    impls: List[str] = field(default_factory=list)


@dataclass
class VariantKind:
    layout: FieldLayout = FieldLayout.PLAIN
    fields: List[Optional[str]] = field(default_factory=list)
    has_stripped_fields: bool = False

    @classmethod
    def from_json(cls, data: Any) -> 'VariantKind':
        tag, payload = split_tag(data)
        if tag == "tuple":
            return cls(layout=FieldLayout.TUPLE, fields=_optional_id_list(payload))
        if tag == "struct":
            payload = _dict(payload)
            return cls(
                layout=FieldLayout.STRUCT,
                fields=list(_id_list(payload.get("fields"))),
                has_stripped_fields=_bool(payload, "has_stripped_fields", "fields_stripped"),
            )
        return cls()


@dataclass
class Discriminant:
    expr: Optional[str] = None
    value: Optional[str] = None


@dataclass
class VariantItem:
    kind: VariantKind = field(default_factory=VariantKind)
    discriminant: Optional[Discriminant] = None


@dataclass
class FunctionItem:
    sig: FunctionSignature = field(default_factory=FunctionSignature)
    generics: Generics = field(default_factory=Generics)
    header: FunctionHeader = field(default_factory=FunctionHeader)
    has_body: bool = False


@dataclass
class TraitItem:
    generics: Generics = field(default_factory=Generics)
    bounds: List[GenericBound] = field(default_factory=list)
    items: List[str] = field(default_factory=list)
    implementations: List[str] = field(default_factory=list)
    is_auto: bool = False
    is_unsafe: bool = False
    is_dyn_compatible: bool = False


@dataclass
class ImplItem:
    """
    An impl block.

    Attributes:
        trait: The implemented trait, ``None`` for inherent impls
        for_type: The implementing type
        is_synthetic: Compiler-generated auto trait impl (Send, Sync, ...)
        blanket_impl: Set when the impl comes from a blanket ``impl<T> X for T``
    """
    generics: Generics = field(default_factory=Generics)
    trait: Optional[ResolvedPath] = None
    for_type: RustType = field(default_factory=UnknownType)
    items: List[str] = field(default_factory=list)
    is_unsafe: bool = False
    is_negative: bool = False
    is_synthetic: bool = False
    blanket_impl: Optional[RustType] = None


@dataclass
class UseItem:
    source: str = ""
    name: Optional[str] = None
    id: Optional[str] = None
    is_glob: bool = False


@dataclass
class TypeAliasItem:
    generics: Generics = field(default_factory=Generics)
    type: Optional[RustType] = None


@dataclass
class ConstExpr:
    expr: Optional[str] = None
    value: Optional[str] = None
    is_literal: bool = False


@dataclass
class ConstantItem:
    type: RustType = field(default_factory=UnknownType)
    const: Optional[ConstExpr] = None


@dataclass
class StaticItem:
    type: RustType = field(default_factory=UnknownType)
    is_mutable: bool = False
    is_unsafe: bool = False
    expr: Optional[str] = None


@dataclass
class StructFieldItem:
    type: RustType = field(default_factory=UnknownType)


@dataclass
class MacroItem:
    source: str = ""


@dataclass
class AssocConstItem:
    type: RustType = field(default_factory=UnknownType)
    value: Optional[str] = None


@dataclass
class AssocTypeItem:
    generics: Generics = field(default_factory=Generics)
    bounds: List[GenericBound] = field(default_factory=list)
    type: Optional[RustType] = None


@dataclass
class UnknownItem:
    """Catch-all for item kinds this model does not recognize."""
    tag: Optional[str] = None


ItemInner = Union[
    ModuleItem,
    StructItem,
    UnionItem,
    EnumItem,
    VariantItem,
    FunctionItem,
    TraitItem,
    ImplItem,
    UseItem,
    TypeAliasItem,
    ConstantItem,
    StaticItem,
    StructFieldItem,
    MacroItem,
    AssocConstItem,
    AssocTypeItem,
    UnknownItem,
]


def _optional_type(value: Any) -> Optional[RustType]:
    return parse_type(value) if value is not None else None


def _parse_module(p: Dict[str, Any]) -> ModuleItem:
    return ModuleItem(
        items=_id_list(p.get("items")),
        is_stripped=_bool(p, "is_stripped"),
        is_crate=_bool(p, "is_crate"),
    )


def _parse_struct(p: Dict[str, Any]) -> StructItem:
    return StructItem(
        kind=StructKind.from_json(p.get("kind")),
        generics=Generics.from_json(p.get("generics")),
        impls=_id_list(p.get("impls")),
    )


def _parse_union(p: Dict[str, Any]) -> UnionItem:
    return UnionItem(
        generics=Generics.from_json(p.get("generics")),
        fields=_id_list(p.get("fields")),
        has_stripped_fields=_bool(p, "has_stripped_fields", "fields_stripped"),
        impls=_id_list(p.get("impls")),
    )


def _parse_enum(p: Dict[str, Any]) -> EnumItem:
    return EnumItem(
        generics=Generics.from_json(p.get("generics")),
        variants=_id_list(p.get("variants")),
        variants_stripped=_bool(p, "variants_stripped", "has_stripped_variants"),
        impls=_id_list(p.get("impls")),
    )


def _parse_variant(p: Dict[str, Any]) -> VariantItem:
    discriminant = p.get("discriminant")
    return VariantItem(
        kind=VariantKind.from_json(p.get("kind")),
        discriminant=Discriminant(
            expr=_str(_dict(discriminant), "expr"),
            value=_str(_dict(discriminant), "value"),
        ) if isinstance(discriminant, dict) else None,
    )


def _parse_function(p: Dict[str, Any]) -> FunctionItem:
    return FunctionItem(
        sig=FunctionSignature.from_json(p.get("sig", p.get("decl"))),
        generics=Generics.from_json(p.get("generics")),
        header=FunctionHeader.from_json(p.get("header")),
        has_body=_bool(p, "has_body"),
    )


def _parse_trait(p: Dict[str, Any]) -> TraitItem:
    return TraitItem(
        generics=Generics.from_json(p.get("generics")),
        bounds=[parse_generic_bound(b) for b in _list(p, "bounds")],
        items=_id_list(p.get("items")),
        implementations=_id_list(p.get("implementations")),
        is_auto=_bool(p, "is_auto"),
        is_unsafe=_bool(p, "is_unsafe"),
        is_dyn_compatible=_bool(p, "is_dyn_compatible", "is_object_safe"),
    )


def _parse_impl(p: Dict[str, Any]) -> ImplItem:
    trait = p.get("trait")
    return ImplItem(
        generics=Generics.from_json(p.get("generics")),
        trait=ResolvedPath.from_json(trait) if trait is not None else None,
        for_type=parse_type(p.get("for")),
        items=_id_list(p.get("items")),
        is_unsafe=_bool(p, "is_unsafe"),
        is_negative=_bool(p, "is_negative", "negative"),
        is_synthetic=_bool(p, "is_synthetic", "synthetic"),
        blanket_impl=_optional_type(p.get("blanket_impl")),
    )


def _parse_use(p: Dict[str, Any]) -> UseItem:
    return UseItem(
        source=_str(p, "source") or "",
        name=_str(p, "name"),
        id=_optional_id(p.get("id")),
        is_glob=_bool(p, "is_glob", "glob"),
    )


def _parse_constant(p: Dict[str, Any]) -> ConstantItem:
    const = p.get("const")
    if isinstance(const, dict):
        expr = ConstExpr(
            expr=_str(const, "expr"),
            value=_str(const, "value"),
            is_literal=_bool(const, "is_literal"),
        )
    elif "expr" in p or "value" in p:
        expr = ConstExpr(expr=_str(p, "expr"), value=_str(p, "value"), is_literal=_bool(p, "is_literal"))
    else:
        expr = None
    return ConstantItem(type=parse_type(p.get("type")), const=expr)


def _parse_static(p: Dict[str, Any]) -> StaticItem:
    return StaticItem(
        type=parse_type(p.get("type")),
        is_mutable=_bool(p, "is_mutable", "mutable"),
        is_unsafe=_bool(p, "is_unsafe"),
        expr=_str(p, "expr"),
    )


def _parse_assoc_type(p: Dict[str, Any]) -> AssocTypeItem:
    return AssocTypeItem(
        generics=Generics.from_json(p.get("generics")),
        bounds=[parse_generic_bound(b) for b in _list(p, "bounds")],
        type=_optional_type(p.get("type", p.get("default"))),
    )


_ITEM_PARSERS: Dict[str, Callable[[Dict[str, Any]], ItemInner]] = {
    "module": _parse_module,
    "struct": _parse_struct,
    "union": _parse_union,
    "enum": _parse_enum,
    "variant": _parse_variant,
    "function": _parse_function,
    "trait": _parse_trait,
    "impl": _parse_impl,
    "use": _parse_use,
    "import": _parse_use,
    "type_alias": lambda p: TypeAliasItem(
        generics=Generics.from_json(p.get("generics")),
        type=_optional_type(p.get("type")),
    ),
    "typedef": lambda p: TypeAliasItem(
        generics=Generics.from_json(p.get("generics")),
        type=_optional_type(p.get("type")),
    ),
    "constant": _parse_constant,
    "static": _parse_static,
    "assoc_const": lambda p: AssocConstItem(
        type=parse_type(p.get("type")),
        value=_str(p, "value", "default"),
    ),
    "assoc_type": _parse_assoc_type,
}


def parse_item_inner(data: Any) -> ItemInner:
    """
    Parse the ``inner`` payload of an item.

    ``struct_field`` and ``macro`` carry a bare payload (a type and a source
    string respectively); every other known kind carries an object.
    """
    tag, payload = split_tag(data)
    if tag is None:
        return UnknownItem()
    if tag == "struct_field":
        return StructFieldItem(type=parse_type(payload))
    if tag == "macro":
        return MacroItem(source=payload if isinstance(payload, str) else "")
    parser = _ITEM_PARSERS.get(tag)
    if parser is None:
        return UnknownItem(tag=tag)
    return parser(_dict(payload))


# =============================================================================
# Items
# =============================================================================

@dataclass
class Visibility:
    """
    Item visibility.

    Attributes:
        kind: Public, Default (private), Crate (``pub(crate)``) or Restricted
        parent: For Restricted, the ID of the module visibility is limited to
        path: For Restricted, the path as written (``"super"``, ``"crate::a"``)
    """
    kind: VisibilityKind = VisibilityKind.PUBLIC
    parent: Optional[str] = None
    path: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> 'Visibility':
        tag, payload = split_tag(data)
        if tag == "restricted":
            payload = _dict(payload)
            return cls(
                kind=VisibilityKind.RESTRICTED,
                parent=_optional_id(payload.get("parent")),
                path=_str(payload, "path"),
            )
        if tag in (VisibilityKind.DEFAULT.value, VisibilityKind.CRATE.value):
            return cls(kind=VisibilityKind(tag))
        return cls()


@dataclass
class Span:
    filename: str = ""
    begin: Tuple[int, int] = (0, 0)
    end: Tuple[int, int] = (0, 0)

    @classmethod
    def from_json(cls, data: Any) -> Optional['Span']:
        if not isinstance(data, dict):
            return None

        def _pos(value: Any) -> Tuple[int, int]:
            if isinstance(value, list) and len(value) == 2 and all(isinstance(v, int) for v in value):
                return (value[0], value[1])
            return (0, 0)

        return cls(
            filename=_str(data, "filename") or "",
            begin=_pos(data.get("begin")),
            end=_pos(data.get("end")),
        )


@dataclass
class Deprecation:
    since: Optional[str] = None
    note: Optional[str] = None


@dataclass
class Item:
    """
    A single declaration in the rustdoc index.

    Attributes:
        id: The item's own ID (may be absent in older formats)
        name: Declared name; ``None`` for impl blocks and some re-exports
        visibility: Declared visibility
        attrs: Raw attribute values (strings or structured objects,
            depending on the format version)
        inner: What the item declares
        docs: Documentation text (not used for extraction)
        span: Source location (not used for extraction)
    """
    id: Optional[str] = None
    name: Optional[str] = None
    visibility: Visibility = field(default_factory=Visibility)
    attrs: List[Any] = field(default_factory=list)
    inner: ItemInner = field(default_factory=UnknownItem)
    crate_id: int = 0
    docs: Optional[str] = None
    span: Optional[Span] = None
    deprecation: Optional[Deprecation] = None
    links: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> 'Item':
        """
        Parse an item object.

        Raises:
            ValueError: If ``data`` is not a JSON object.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected item object, got {type(data).__name__}")
        deprecation = data.get("deprecation")
        links = {
            key: link_id
            for key, link_id in ((k, _optional_id(v)) for k, v in _dict(data.get("links")).items())
            if link_id is not None
        }
        crate_id = data.get("crate_id")
        return cls(
            id=_optional_id(data.get("id")),
            name=_str(data, "name"),
            visibility=Visibility.from_json(data.get("visibility")),
            attrs=_list(data, "attrs"),
            inner=parse_item_inner(data.get("inner")),
            crate_id=crate_id if isinstance(crate_id, int) and not isinstance(crate_id, bool) else 0,
            docs=_str(data, "docs"),
            span=Span.from_json(data.get("span")),
            deprecation=Deprecation(
                since=_str(deprecation, "since"),
                note=_str(deprecation, "note"),
            ) if isinstance(deprecation, dict) else None,
            links=links,
        )


@dataclass
class ItemSummary:
    """Path information for an item, local or external."""
    path: List[str] = field(default_factory=list)
    kind: ItemKind = ItemKind.MODULE
    crate_id: int = 0

    @classmethod
    def from_json(cls, data: Any) -> 'ItemSummary':
        data = _dict(data)
        crate_id = data.get("crate_id")
        return cls(
            path=[p for p in _list(data, "path") if isinstance(p, str)],
            kind=ItemKind.from_json(data["kind"]) if "kind" in data else ItemKind.MODULE,
            crate_id=crate_id if isinstance(crate_id, int) and not isinstance(crate_id, bool) else 0,
        )

    @property
    def full_path(self) -> str:
        return "::".join(self.path)


@dataclass
class ExternalCrate:
    name: str
    html_root_url: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> 'ExternalCrate':
        data = _dict(data)
        return cls(name=_str(data, "name") or "", html_root_url=_str(data, "html_root_url"))


@dataclass
class Crate:
    """
    Top-level rustdoc JSON document.

    Attributes:
        root: ID of the root module (which doubles as the crate)
        crate_version: Version from Cargo.toml, when rustdoc was given one
        index: Every documented item, keyed by ID
        paths: Path summaries for local and external items, keyed by ID
        external_crates: External crates referenced by the documented API
        format_version: rustdoc JSON format version (informational)
    """
    root: str
    crate_version: Optional[str] = None
    index: Dict[str, Item] = field(default_factory=dict)
    paths: Dict[str, ItemSummary] = field(default_factory=dict)
    external_crates: Dict[str, ExternalCrate] = field(default_factory=dict)
    format_version: int = 0
    includes_private: bool = False

    @classmethod
    def from_json(cls, data: Any) -> 'Crate':
        """
        Build a Crate from decoded JSON.

        An index entry that is not an object becomes an item with an
        ``UnknownItem`` body.

        Raises:
            ValueError: If the document is not an object or has no usable
                ``root`` pointer.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object at top level, got {type(data).__name__}")
        if "root" not in data:
            raise ValueError("Document missing required 'root' field")
        root = parse_id(data["root"])

        index: Dict[str, Item] = {}
        for key, raw in _dict(data.get("index")).items():
            if isinstance(raw, dict):
                index[str(key)] = Item.from_json(raw)
            else:
                index[str(key)] = Item(id=str(key), inner=UnknownItem())

        format_version = data.get("format_version")
        crate_version = data.get("crate_version")
        return cls(
            root=root,
            crate_version=crate_version if isinstance(crate_version, str) else None,
            index=index,
            paths={str(k): ItemSummary.from_json(v) for k, v in _dict(data.get("paths")).items()},
            external_crates={
                str(k): ExternalCrate.from_json(v)
                for k, v in _dict(data.get("external_crates")).items()
                if isinstance(v, dict)
            },
            format_version=format_version if isinstance(format_version, int) and not isinstance(format_version, bool) else 0,
            includes_private=_bool(data, "includes_private"),
        )

    @property
    def root_item(self) -> Optional[Item]:
        return self.index.get(self.root)

    @property
    def name(self) -> str:
        """Crate name, taken from the root module item."""
        root = self.root_item
        if root is not None and root.name:
            return root.name
        return ExtractionDefaults.UNKNOWN_CRATE_NAME
