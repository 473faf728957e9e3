"""
Crate to RDF Extractor

This module walks a parsed rustdoc ``Crate`` and emits type-graph triples.

Mapping Strategy:
- Crate -> rt:Crate / tg:Assembly
- Module -> rt:Module / tg:Namespace (root module doubles as the crate)
- Struct -> tg:Struct, Enum -> tg:Enum, Union -> rt:Union
- Trait -> tg:Interface / rt:Trait
- TypeAlias -> rt:TypeAlias
- Function -> tg:Method (module-level, trait or impl member)
- Constant -> tg:Field / rt:Constant, Static -> rt:Static
- Impl -> rt:TraitImpl / rt:InherentImpl (processed after the module walk)

The walk is a single depth-first pass from the root module. Type and module
nodes are guarded by visited sets so each is emitted at most once. Impl
blocks are handled in a final flat pass over the whole index because they
may only attach to types the walk has already emitted.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Set

from tqdm import tqdm

from .constants import ExtractionDefaults
from .emitters.base import TriplesEmitter
from .iri_minter import IriMinter
from .ontology import ONTOLOGY_PREFIXES, RT, STANDARD, TG
from .rustdoc_models import (
    AngleBracketedArgs,
    ArrayType,
    AssocConstItem,
    AssocTypeItem,
    BorrowedRefType,
    ConstantItem,
    ConstParam,
    Crate,
    EnumItem,
    FieldLayout,
    FunctionItem,
    GenericBound,
    GenericType,
    Generics,
    ImplItem,
    Item,
    LifetimeParam,
    ModuleItem,
    PrimitiveType,
    RawPointerType,
    ResolvedPath,
    RustType,
    SliceType,
    StaticItem,
    StructFieldItem,
    StructItem,
    TraitBound,
    TraitItem,
    TupleType,
    TypeAliasItem,
    TypeArg,
    TypeParam,
    UnionItem,
    VariantItem,
    Visibility,
    VisibilityKind,
)

logger = logging.getLogger(__name__)

SEP = ExtractionDefaults.PATH_SEPARATOR

_DERIVED_MARKERS = frozenset({"automatically_derived", "#[automatically_derived]"})


# =============================================================================
# Options and statistics
# =============================================================================

@dataclass
class ExtractionOptions:
    """
    Options controlling what gets extracted.

    Attributes:
        base_uri: Base address for minted IRIs (a trailing ``/`` is ignored)
        include_impls: Emit impl blocks and the methods they contain
        include_attributes: Emit ``tg:hasAttribute`` literals for item attributes
        extract_error_types: Emit ``rt:errorType`` for ``Result<T, E>`` returns
        extract_derives: Emit ``rt:derives`` for ``#[derive]`` generated impls
    """
    base_uri: str = ExtractionDefaults.BASE_URI
    include_impls: bool = True
    include_attributes: bool = True
    extract_error_types: bool = True
    extract_derives: bool = True

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ExtractionOptions':
        """
        Create options from a dictionary, optionally nested under ``extraction``.

        Raises:
            ValueError: If the section is not an object, a flag is not a
                boolean, or ``base_uri`` is not a string.
        """
        section = config_dict.get('extraction', config_dict)
        if not isinstance(section, dict):
            raise ValueError(f"'extraction' section must be an object, got {type(section).__name__}")
        defaults = cls()

        def flag(key: str) -> bool:
            value = section.get(key, getattr(defaults, key))
            if not isinstance(value, bool):
                raise ValueError(f"'{key}' must be true or false, got {value!r}")
            return value

        base_uri = section.get('base_uri', defaults.base_uri)
        if not isinstance(base_uri, str):
            raise ValueError(f"'base_uri' must be a string, got {base_uri!r}")
        return cls(
            base_uri=base_uri,
            include_impls=flag('include_impls'),
            include_attributes=flag('include_attributes'),
            extract_error_types=flag('extract_error_types'),
            extract_derives=flag('extract_derives'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ExtractionStats:
    """Counters collected during one extraction run."""
    crate_name: str = ""
    crate_version: str = ""
    namespaces: int = 0
    types: int = 0
    functions: int = 0
    external_types: int = 0
    impls_processed: int = 0
    impls_skipped: Dict[str, int] = field(default_factory=dict)
    unresolved_types: int = 0

    def skip_impl(self, reason: str) -> None:
        self.impls_skipped[reason] = self.impls_skipped.get(reason, 0) + 1

    def get_summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            f"Extraction Summary ({self.crate_name} v{self.crate_version}):",
            f"  Namespaces: {self.namespaces}",
            f"  Types: {self.types}",
            f"  Functions: {self.functions}",
            f"  External types: {self.external_types}",
            f"  Impls processed: {self.impls_processed}",
        ]
        if self.impls_skipped:
            skipped = ", ".join(f"{reason}={count}" for reason, count in sorted(self.impls_skipped.items()))
            lines.append(f"  Impls skipped: {skipped}")
        if self.unresolved_types:
            lines.append(f"  Unresolved type references: {self.unresolved_types}")
        return "\n".join(lines)


# =============================================================================
# Free helpers
# =============================================================================

def visibility_label(visibility: Visibility) -> str:
    """Map a rustdoc visibility to the shared accessibility vocabulary."""
    if visibility.kind is VisibilityKind.PUBLIC:
        return "Public"
    if visibility.kind is VisibilityKind.DEFAULT:
        return "Private"
    if visibility.kind is VisibilityKind.RESTRICTED and visibility.path == "super":
        return "Protected"
    return "Internal"


def type_display_name(ty: RustType) -> str:
    """Human-readable name for a type, used inside composite type IRIs."""
    if isinstance(ty, PrimitiveType):
        return ty.name
    if isinstance(ty, ResolvedPath):
        return ty.path
    if isinstance(ty, GenericType):
        return ty.name
    if isinstance(ty, TupleType):
        return "(" + ",".join(type_display_name(t) for t in ty.elements) + ")"
    if isinstance(ty, SliceType):
        return f"[{type_display_name(ty.element)}]"
    if isinstance(ty, ArrayType):
        return f"[{type_display_name(ty.element)};{ty.length}]"
    if isinstance(ty, BorrowedRefType):
        prefix = "&mut " if ty.is_mutable else "&"
        return prefix + type_display_name(ty.target)
    if isinstance(ty, RawPointerType):
        prefix = "*mut " if ty.is_mutable else "*const "
        return prefix + type_display_name(ty.target)
    return "unknown"


def attribute_text(attr: Any) -> Optional[str]:
    """
    Render one raw attribute value as text.

    Older format versions store attributes as strings; newer ones use tagged
    objects such as ``{"other": "#[inline]"}`` or ``{"repr": {...}}``.
    """
    if isinstance(attr, str):
        return attr
    if isinstance(attr, dict) and len(attr) == 1:
        tag, payload = next(iter(attr.items()))
        if isinstance(payload, str):
            return payload
        if isinstance(payload, dict) and isinstance(payload.get("content"), str):
            return payload["content"]
        return tag
    return None


def is_automatically_derived(item: Item) -> bool:
    return any(isinstance(a, str) and a.strip() in _DERIVED_MARKERS for a in item.attrs)


# =============================================================================
# Extractor
# =============================================================================

class CrateExtractor:
    """
    Walks a rustdoc ``Crate`` and emits RDF triples through an emitter.

    The extractor owns its visited sets for the lifetime of one instance.
    Call ``extract()`` once; a second call on the same instance would see
    every type as already emitted.

    Example usage:
        crate = load_json("target/doc/mycrate.json")
        with open("mycrate.nt", "w", encoding="utf-8") as f:
            emitter = NTriplesEmitter(f)
            stats = CrateExtractor(emitter, crate, ExtractionOptions()).extract()
            emitter.flush()
    """

    def __init__(
        self,
        emitter: TriplesEmitter,
        crate: Crate,
        options: Optional[ExtractionOptions] = None,
        show_progress: bool = False,
    ):
        """
        Initialize the extractor.

        Args:
            emitter: Sink for emitted triples
            crate: Fully parsed rustdoc document
            options: Extraction options (defaults if omitted)
            show_progress: Show a tqdm progress bar for the impl pass
        """
        self.emitter = emitter
        self.crate = crate
        self.options = options or ExtractionOptions()
        self.show_progress = show_progress
        self.iris = IriMinter(self.options.base_uri)

        self.crate_name = crate.name
        self.crate_version = crate.crate_version or ExtractionDefaults.UNKNOWN_VERSION
        self.crate_iri = self.iris.crate_iri(self.crate_name, self.crate_version)

        self._emitted_types: Set[str] = set()
        self._stub_types: Set[str] = set()
        self._emitted_modules: Set[str] = set()
        self._walking_modules: Set[str] = set()
        self.stats = ExtractionStats(crate_name=self.crate_name, crate_version=self.crate_version)

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    def extract(self) -> ExtractionStats:
        """Run the full extraction, emitting all triples."""
        self._register_prefixes()
        self._emit_crate_node()
        self._emit_external_crates()
        self._walk_module(self.crate.root, self.crate_name)
        if self.options.include_impls:
            self._process_all_impls()

        logger.info(
            f"Extracted {self.crate_name} v{self.crate_version}: "
            f"{self.stats.types} types, {self.stats.namespaces} modules, "
            f"{self.stats.impls_processed} impls"
        )
        return self.stats

    def _register_prefixes(self) -> None:
        for prefix, ns in ONTOLOGY_PREFIXES:
            self.emitter.add_prefix(prefix, ns)

    def _emit_crate_node(self) -> None:
        iri = self.crate_iri
        self.emitter.emit_iri(iri, STANDARD.RDF_TYPE, RT.CRATE)
        self.emitter.emit_iri(iri, STANDARD.RDF_TYPE, TG.ASSEMBLY)
        self.emitter.emit_literal(iri, TG.NAME, self.crate_name)
        self.emitter.emit_literal(iri, TG.LANGUAGE, ExtractionDefaults.SOURCE_LANGUAGE)
        self.emitter.emit_literal(iri, TG.VERSION, self.crate_version)

    def _emit_external_crates(self) -> None:
        for ext in self.crate.external_crates.values():
            if not ext.name:
                continue
            dep_iri = self.iris.crate_iri(ext.name, ExtractionDefaults.EXTERNAL_CRATE_VERSION)
            self.emitter.emit_iri(self.crate_iri, RT.DEPENDS_ON, dep_iri)
            self.emitter.emit_iri(dep_iri, STANDARD.RDF_TYPE, RT.CRATE)
            self.emitter.emit_literal(dep_iri, TG.NAME, ext.name)

    # -------------------------------------------------------------------------
    # Module walking
    # -------------------------------------------------------------------------

    def _module_iri(self, module_path: str) -> str:
        return self.iris.module_iri(self.crate_name, self.crate_version, module_path)

    def _walk_module(self, item_id: str, module_path: str) -> None:
        item = self.crate.index.get(item_id)
        if item is None:
            logger.warning(f"Module {item_id} ({module_path}) not found in index")
            return
        if not isinstance(item.inner, ModuleItem):
            return
        if item_id in self._walking_modules:
            logger.warning(f"Module cycle detected at {module_path}, not descending again")
            return

        # The root module is the crate itself and gets no namespace node.
        if item_id != self.crate.root:
            self._emit_module_node(module_path, item)

        self._walking_modules.add(item_id)
        try:
            for child_id in item.inner.items:
                self._walk_item(child_id, module_path)
        finally:
            self._walking_modules.discard(item_id)

    def _emit_module_node(self, module_path: str, item: Item) -> None:
        if module_path in self._emitted_modules:
            return
        self._emitted_modules.add(module_path)
        self.stats.namespaces += 1

        module_iri = self._module_iri(module_path)
        self.emitter.emit_iri(module_iri, STANDARD.RDF_TYPE, RT.MODULE)
        self.emitter.emit_iri(module_iri, STANDARD.RDF_TYPE, TG.NAMESPACE)
        self.emitter.emit_literal(module_iri, TG.NAME, item.name or module_path)
        self.emitter.emit_literal(module_iri, TG.FULL_NAME, module_path)
        self.emitter.emit_iri(module_iri, TG.DEFINED_IN_ASSEMBLY, self.crate_iri)
        self.emitter.emit_literal(module_iri, TG.ACCESSIBILITY, visibility_label(item.visibility))

        parent_path, sep, _ = module_path.rpartition(SEP)
        if sep:
            self.emitter.emit_iri(module_iri, TG.PARENT_NAMESPACE, self._module_iri(parent_path))

    def _walk_item(self, item_id: str, module_path: str) -> None:
        item = self.crate.index.get(item_id)
        if item is None:
            logger.debug(f"Item {item_id} in {module_path} not in index, skipping")
            return

        inner = item.inner
        if isinstance(inner, ModuleItem):
            self._walk_module(item_id, f"{module_path}{SEP}{item.name or 'unnamed'}")
        elif isinstance(inner, StructItem):
            self._extract_struct(item, inner, module_path)
        elif isinstance(inner, EnumItem):
            self._extract_enum(item, inner, module_path)
        elif isinstance(inner, TraitItem):
            self._extract_trait(item, inner, module_path)
        elif isinstance(inner, FunctionItem):
            self._extract_module_function(item, inner, module_path)
        elif isinstance(inner, ConstantItem):
            self._extract_constant(item, inner, module_path)
        elif isinstance(inner, StaticItem):
            self._extract_static(item, inner, module_path)
        elif isinstance(inner, TypeAliasItem):
            self._extract_type_alias(item, inner, module_path)
        elif isinstance(inner, UnionItem):
            self._extract_union(item, inner, module_path)
        # Use items are re-exports and Impl items get their own pass.

    # -------------------------------------------------------------------------
    # Type declarations
    # -------------------------------------------------------------------------

    def _begin_type(self, item: Item, module_path: str, *rdf_types: str) -> Optional[str]:
        """
        Emit the common header of a locally defined type.

        Returns the type IRI, or ``None`` when the item has no name or the
        type was already emitted.
        """
        if not item.name:
            return None
        full_path = f"{module_path}{SEP}{item.name}"
        type_iri = self.iris.type_iri(self.crate_name, self.crate_version, full_path)
        if type_iri in self._emitted_types:
            logger.debug(f"Type {full_path} already emitted, skipping duplicate")
            return None
        self._emitted_types.add(type_iri)
        self.stats.types += 1

        for rdf_type in rdf_types:
            self.emitter.emit_iri(type_iri, STANDARD.RDF_TYPE, rdf_type)
        self.emitter.emit_literal(type_iri, TG.NAME, item.name)
        self.emitter.emit_literal(type_iri, TG.FULL_NAME, full_path)
        self.emitter.emit_iri(type_iri, TG.DEFINED_IN_ASSEMBLY, self.crate_iri)
        self.emitter.emit_iri(type_iri, TG.IN_NAMESPACE, self._module_iri(module_path))
        self.emitter.emit_literal(type_iri, TG.ACCESSIBILITY, visibility_label(item.visibility))
        self._extract_attributes(item, type_iri)
        return type_iri

    def _emit_generic_flag(self, generics: Generics, owner_iri: str) -> None:
        if generics.has_type_params:
            self.emitter.emit_bool(owner_iri, TG.IS_GENERIC, True)

    def _extract_struct(self, item: Item, inner: StructItem, module_path: str) -> None:
        type_iri = self._begin_type(item, module_path, TG.STRUCT)
        if type_iri is None:
            return
        self._emit_generic_flag(inner.generics, type_iri)
        self._extract_generics(inner.generics, type_iri)
        for field_id in inner.kind.fields:
            if field_id is not None:
                self._extract_field(field_id, type_iri)
        if self.options.extract_derives:
            self._extract_derives(inner.impls, type_iri)

    def _extract_union(self, item: Item, inner: UnionItem, module_path: str) -> None:
        type_iri = self._begin_type(item, module_path, RT.UNION)
        if type_iri is None:
            return
        self._emit_generic_flag(inner.generics, type_iri)
        self._extract_generics(inner.generics, type_iri)
        for field_id in inner.fields:
            self._extract_field(field_id, type_iri)

    def _extract_enum(self, item: Item, inner: EnumItem, module_path: str) -> None:
        type_iri = self._begin_type(item, module_path, TG.ENUM)
        if type_iri is None:
            return
        self._emit_generic_flag(inner.generics, type_iri)
        self._extract_generics(inner.generics, type_iri)
        for variant_id in inner.variants:
            self._extract_variant(variant_id, type_iri)
        if self.options.extract_derives:
            self._extract_derives(inner.impls, type_iri)

    def _extract_variant(self, variant_id: str, enum_iri: str) -> None:
        item = self.crate.index.get(variant_id)
        if item is None or not item.name:
            return

        variant_iri = self.iris.variant_iri(enum_iri, item.name)
        self.emitter.emit_iri(variant_iri, STANDARD.RDF_TYPE, RT.ENUM_VARIANT)
        self.emitter.emit_literal(variant_iri, TG.NAME, item.name)
        self.emitter.emit_iri(enum_iri, RT.HAS_VARIANT, variant_iri)

        if not isinstance(item.inner, VariantItem):
            return
        kind = item.inner.kind
        self.emitter.emit_literal(variant_iri, RT.VARIANT_KIND, kind.layout.value)
        if kind.layout is not FieldLayout.PLAIN:
            for field_id in kind.fields:
                if field_id is not None:
                    self._extract_variant_field(field_id, variant_iri)

    def _extract_variant_field(self, field_id: str, variant_iri: str) -> None:
        item = self.crate.index.get(field_id)
        if item is None or not isinstance(item.inner, StructFieldItem):
            return
        name = item.name or "unnamed"
        field_iri = self.iris.member_iri(variant_iri, name)
        self.emitter.emit_iri(field_iri, STANDARD.RDF_TYPE, TG.FIELD)
        self.emitter.emit_literal(field_iri, TG.NAME, name)
        self.emitter.emit_iri(variant_iri, RT.VARIANT_FIELD, field_iri)
        type_iri = self.resolve_type_iri(item.inner.type)
        if type_iri is not None:
            self.emitter.emit_iri(field_iri, TG.FIELD_TYPE, type_iri)

    def _extract_field(self, field_id: str, owner_iri: str) -> None:
        item = self.crate.index.get(field_id)
        if item is None or not isinstance(item.inner, StructFieldItem):
            return
        name = item.name or "unnamed"
        field_iri = self.iris.member_iri(owner_iri, name)
        self.emitter.emit_iri(field_iri, STANDARD.RDF_TYPE, TG.FIELD)
        self.emitter.emit_literal(field_iri, TG.NAME, name)
        self.emitter.emit_iri(owner_iri, TG.HAS_MEMBER, field_iri)
        self.emitter.emit_iri(field_iri, TG.MEMBER_OF, owner_iri)
        self.emitter.emit_literal(field_iri, TG.ACCESSIBILITY, visibility_label(item.visibility))
        type_iri = self.resolve_type_iri(item.inner.type)
        if type_iri is not None:
            self.emitter.emit_iri(field_iri, TG.FIELD_TYPE, type_iri)

    def _extract_trait(self, item: Item, inner: TraitItem, module_path: str) -> None:
        type_iri = self._begin_type(item, module_path, TG.INTERFACE, RT.TRAIT)
        if type_iri is None:
            return
        if inner.is_unsafe:
            self.emitter.emit_bool(type_iri, RT.IS_UNSAFE, True)
        self._emit_generic_flag(inner.generics, type_iri)
        self._extract_generics(inner.generics, type_iri)

        for bound in inner.bounds:
            if isinstance(bound, TraitBound):
                supertrait_iri = self.resolve_path_iri(bound.trait)
                self.emitter.emit_iri(type_iri, RT.SUPER_TRAIT, supertrait_iri)
                self._ensure_type_emitted(supertrait_iri, bound.trait.path)

        for method_id in inner.items:
            self._extract_type_method(method_id, type_iri)

    def _extract_type_alias(self, item: Item, inner: TypeAliasItem, module_path: str) -> None:
        type_iri = self._begin_type(item, module_path, RT.TYPE_ALIAS)
        if type_iri is None:
            return
        self._emit_generic_flag(inner.generics, type_iri)
        self._extract_generics(inner.generics, type_iri)
        if inner.type is not None:
            target_iri = self.resolve_type_iri(inner.type)
            if target_iri is not None:
                self.emitter.emit_iri(type_iri, TG.RELATED_TO, target_iri)

    def _ensure_type_emitted(self, type_iri: str, name: str) -> None:
        """
        Emit a minimal stub node for a type with no declaration so far.

        Stubs are tracked apart from declarations, so a local type referenced
        before the walk reaches it still gets its full declaration later.
        """
        if type_iri in self._emitted_types or type_iri in self._stub_types:
            return
        self._stub_types.add(type_iri)
        self.stats.external_types += 1
        self.emitter.emit_iri(type_iri, STANDARD.RDF_TYPE, TG.TYPE)
        self.emitter.emit_literal(type_iri, TG.NAME, name)

    def _extract_attributes(self, item: Item, owner_iri: str) -> None:
        if not self.options.include_attributes:
            return
        for attr in item.attrs:
            text = attribute_text(attr)
            if text is None or text.strip() in _DERIVED_MARKERS:
                continue
            self.emitter.emit_literal(owner_iri, TG.HAS_ATTRIBUTE, text)

    def _extract_derives(self, impl_ids: List[str], type_iri: str) -> None:
        """Record the traits named by ``#[derive(...)]`` on a struct or enum."""
        for impl_id in impl_ids:
            impl_item = self.crate.index.get(impl_id)
            if impl_item is None or not is_automatically_derived(impl_item):
                continue
            if isinstance(impl_item.inner, ImplItem) and impl_item.inner.trait is not None:
                self.emitter.emit_literal(type_iri, RT.DERIVES, impl_item.inner.trait.path)

    # -------------------------------------------------------------------------
    # Functions, constants, statics
    # -------------------------------------------------------------------------

    def _emit_member_header(self, member_iri: str, name: str, owner_iri: str, item: Item) -> None:
        self.emitter.emit_literal(member_iri, TG.NAME, name)
        self.emitter.emit_iri(owner_iri, TG.HAS_MEMBER, member_iri)
        self.emitter.emit_iri(member_iri, TG.MEMBER_OF, owner_iri)
        self.emitter.emit_literal(member_iri, TG.ACCESSIBILITY, visibility_label(item.visibility))

    def _extract_module_function(self, item: Item, inner: FunctionItem, module_path: str) -> None:
        if not item.name:
            return
        module_iri = self._module_iri(module_path)
        fn_iri = self.iris.member_iri(module_iri, item.name)
        self.stats.functions += 1

        self.emitter.emit_iri(fn_iri, STANDARD.RDF_TYPE, TG.METHOD)
        self.emitter.emit_literal(fn_iri, TG.NAME, item.name)
        self.emitter.emit_literal(fn_iri, TG.FULL_NAME, f"{module_path}{SEP}{item.name}")
        self.emitter.emit_iri(module_iri, TG.HAS_MEMBER, fn_iri)
        self.emitter.emit_iri(fn_iri, TG.MEMBER_OF, module_iri)
        self.emitter.emit_literal(fn_iri, TG.ACCESSIBILITY, visibility_label(item.visibility))
        self._extract_attributes(item, fn_iri)

        self._extract_function_details(fn_iri, inner)
        if self.options.extract_error_types:
            self._extract_error_type(fn_iri, inner)

    def _extract_type_method(self, method_id: str, owner_iri: str) -> None:
        """Extract a trait or impl method as a member of ``owner_iri``."""
        item = self.crate.index.get(method_id)
        if item is None or not item.name:
            return
        method_iri = self.iris.member_iri(owner_iri, item.name)
        self.stats.functions += 1

        self.emitter.emit_iri(method_iri, STANDARD.RDF_TYPE, TG.METHOD)
        self._emit_member_header(method_iri, item.name, owner_iri, item)

        if isinstance(item.inner, FunctionItem):
            self._extract_function_details(method_iri, item.inner)
            # Trait methods without a body are required; provided ones are not abstract.
            if not item.inner.has_body:
                self.emitter.emit_bool(method_iri, TG.IS_ABSTRACT, True)
            if self.options.extract_error_types:
                self._extract_error_type(method_iri, item.inner)

    def _extract_function_details(self, fn_iri: str, func: FunctionItem) -> None:
        header = func.header
        if header.is_unsafe:
            self.emitter.emit_bool(fn_iri, RT.IS_UNSAFE, True)
        if header.is_async:
            self.emitter.emit_bool(fn_iri, TG.IS_ASYNC, True)
        if header.is_const:
            self.emitter.emit_bool(fn_iri, TG.IS_CONST, True)

        self._emit_generic_flag(func.generics, fn_iri)
        self._extract_generics(func.generics, fn_iri)

        ordinal = 0
        for name, ty in func.sig.inputs:
            if name == "self":
                continue
            param_iri = self.iris.parameter_iri(fn_iri, ordinal)
            self.emitter.emit_iri(param_iri, STANDARD.RDF_TYPE, TG.PARAMETER)
            self.emitter.emit_literal(param_iri, TG.NAME, name)
            self.emitter.emit_int(param_iri, TG.ORDINAL, ordinal)
            self.emitter.emit_iri(fn_iri, TG.HAS_PARAMETER, param_iri)
            self.emitter.emit_iri(param_iri, TG.PARAMETER_OF, fn_iri)
            type_iri = self.resolve_type_iri(ty)
            if type_iri is not None:
                self.emitter.emit_iri(param_iri, TG.PARAMETER_TYPE, type_iri)
            ordinal += 1

        if func.sig.output is not None:
            return_iri = self.resolve_type_iri(func.sig.output)
            if return_iri is not None:
                self.emitter.emit_iri(fn_iri, TG.RETURN_TYPE, return_iri)

    def _extract_error_type(self, fn_iri: str, func: FunctionItem) -> None:
        """Emit ``rt:errorType`` when the function returns ``Result<T, E>``."""
        output = func.sig.output
        if not isinstance(output, ResolvedPath):
            return
        if output.path != "Result" and not output.path.endswith(f"{SEP}Result"):
            return
        if not isinstance(output.args, AngleBracketedArgs) or len(output.args.args) < 2:
            return
        error_arg = output.args.args[1]
        if not isinstance(error_arg, TypeArg):
            return
        error_iri = self.resolve_type_iri(error_arg.type)
        if error_iri is not None:
            self.emitter.emit_iri(fn_iri, RT.ERROR_TYPE, error_iri)

    def _extract_constant(self, item: Item, inner: ConstantItem, module_path: str) -> None:
        if not item.name:
            return
        module_iri = self._module_iri(module_path)
        const_iri = self.iris.member_iri(module_iri, item.name)

        self.emitter.emit_iri(const_iri, STANDARD.RDF_TYPE, TG.FIELD)
        self.emitter.emit_iri(const_iri, STANDARD.RDF_TYPE, RT.CONSTANT)
        self.emitter.emit_literal(const_iri, TG.NAME, item.name)
        self.emitter.emit_bool(const_iri, TG.IS_CONST, True)
        self.emitter.emit_iri(module_iri, TG.HAS_MEMBER, const_iri)
        self.emitter.emit_iri(const_iri, TG.MEMBER_OF, module_iri)
        self.emitter.emit_literal(const_iri, TG.ACCESSIBILITY, visibility_label(item.visibility))

        type_iri = self.resolve_type_iri(inner.type)
        if type_iri is not None:
            self.emitter.emit_iri(const_iri, TG.FIELD_TYPE, type_iri)

    def _extract_static(self, item: Item, inner: StaticItem, module_path: str) -> None:
        if not item.name:
            return
        module_iri = self._module_iri(module_path)
        static_iri = self.iris.member_iri(module_iri, item.name)

        self.emitter.emit_iri(static_iri, STANDARD.RDF_TYPE, RT.STATIC)
        self._emit_member_header(static_iri, item.name, module_iri, item)

        if inner.is_mutable:
            self.emitter.emit_bool(static_iri, RT.IS_MUTABLE, True)
        type_iri = self.resolve_type_iri(inner.type)
        if type_iri is not None:
            self.emitter.emit_iri(static_iri, TG.FIELD_TYPE, type_iri)

    # -------------------------------------------------------------------------
    # Generics
    # -------------------------------------------------------------------------

    def _extract_generics(self, generics: Generics, owner_iri: str) -> None:
        for ordinal, param in enumerate(generics.params):
            kind = param.kind
            if isinstance(kind, TypeParam):
                tp_iri = self.iris.type_parameter_iri(owner_iri, ordinal)
                self.emitter.emit_iri(tp_iri, STANDARD.RDF_TYPE, TG.TYPE_PARAMETER)
                self.emitter.emit_literal(tp_iri, TG.NAME, param.name)
                self.emitter.emit_int(tp_iri, TG.ORDINAL, ordinal)
                self.emitter.emit_iri(owner_iri, TG.HAS_TYPE_PARAMETER, tp_iri)
                self.emitter.emit_iri(tp_iri, TG.TYPE_PARAMETER_OF, owner_iri)
                self._extract_trait_bounds(kind.bounds, tp_iri)
            elif isinstance(kind, LifetimeParam):
                lt_iri = self.iris.lifetime_iri(owner_iri, param.name)
                self.emitter.emit_iri(lt_iri, STANDARD.RDF_TYPE, RT.LIFETIME)
                self.emitter.emit_literal(lt_iri, TG.NAME, param.name)
                self.emitter.emit_iri(owner_iri, RT.HAS_LIFETIME, lt_iri)
            elif isinstance(kind, ConstParam):
                cp_iri = self.iris.type_parameter_iri(owner_iri, ordinal)
                self.emitter.emit_iri(cp_iri, STANDARD.RDF_TYPE, RT.CONST_PARAM)
                self.emitter.emit_literal(cp_iri, TG.NAME, param.name)
                self.emitter.emit_int(cp_iri, TG.ORDINAL, ordinal)
                self.emitter.emit_iri(owner_iri, TG.HAS_TYPE_PARAMETER, cp_iri)
                type_iri = self.resolve_type_iri(kind.type)
                if type_iri is not None:
                    self.emitter.emit_iri(cp_iri, TG.PARAMETER_TYPE, type_iri)

    def _extract_trait_bounds(self, bounds: List[GenericBound], param_iri: str) -> None:
        for bound in bounds:
            if isinstance(bound, TraitBound):
                bound_iri = self.resolve_path_iri(bound.trait)
                self.emitter.emit_iri(param_iri, RT.TRAIT_BOUND, bound_iri)
                self._ensure_type_emitted(bound_iri, bound.trait.path)

    # -------------------------------------------------------------------------
    # Impl blocks
    # -------------------------------------------------------------------------

    def _process_all_impls(self) -> None:
        impl_ids = [item_id for item_id, item in self.crate.index.items() if isinstance(item.inner, ImplItem)]
        logger.debug(f"Processing {len(impl_ids)} impl blocks")
        disable = not self.show_progress or len(impl_ids) < ExtractionDefaults.PROGRESS_THRESHOLD
        for impl_id in tqdm(impl_ids, desc="Processing impls", unit="impl", disable=disable):
            self._process_impl(impl_id)

    def _process_impl(self, impl_id: str) -> None:
        item = self.crate.index[impl_id]
        impl = item.inner
        if not isinstance(impl, ImplItem):
            return

        if impl.is_synthetic:
            self.stats.skip_impl("synthetic")
            return
        if impl.blanket_impl is not None:
            self.stats.skip_impl("blanket")
            return

        for_iri = self.resolve_type_iri(impl.for_type)
        if for_iri is None:
            self.stats.skip_impl("unresolved")
            return
        if for_iri not in self._emitted_types:
            logger.debug(f"Impl {impl_id} targets {for_iri}, not a local type; skipping")
            self.stats.skip_impl("foreign")
            return

        impl_iri = self.iris.impl_iri(self.crate_name, self.crate_version, impl_id)
        self.stats.impls_processed += 1

        if impl.trait is not None:
            trait_iri = self.resolve_path_iri(impl.trait)
            self.emitter.emit_iri(impl_iri, STANDARD.RDF_TYPE, RT.TRAIT_IMPL)
            self.emitter.emit_iri(impl_iri, RT.IMPL_FOR, for_iri)
            self.emitter.emit_iri(impl_iri, RT.IMPL_TRAIT, trait_iri)
            self.emitter.emit_iri(for_iri, TG.IMPLEMENTS, trait_iri)
            self._ensure_type_emitted(trait_iri, impl.trait.path)
            # Trait impl methods belong to the impl block.
            owner_iri = impl_iri
        else:
            self.emitter.emit_iri(impl_iri, STANDARD.RDF_TYPE, RT.INHERENT_IMPL)
            self.emitter.emit_iri(impl_iri, RT.IMPL_FOR, for_iri)
            # Inherent methods belong to the type itself.
            owner_iri = for_iri

        for member_id in impl.items:
            self._extract_impl_item(member_id, owner_iri)

    def _extract_impl_item(self, item_id: str, owner_iri: str) -> None:
        item = self.crate.index.get(item_id)
        if item is None:
            return
        if isinstance(item.inner, FunctionItem):
            self._extract_type_method(item_id, owner_iri)
        elif isinstance(item.inner, (AssocTypeItem, AssocConstItem)) and item.name:
            member_iri = self.iris.member_iri(owner_iri, item.name)
            self.emitter.emit_iri(member_iri, STANDARD.RDF_TYPE, TG.MEMBER)
            self.emitter.emit_literal(member_iri, TG.NAME, item.name)
            self.emitter.emit_iri(owner_iri, TG.HAS_MEMBER, member_iri)

    # -------------------------------------------------------------------------
    # Type resolution
    # -------------------------------------------------------------------------

    def resolve_type_iri(self, ty: RustType) -> Optional[str]:
        """
        Resolve a type reference to an IRI.

        Generic parameters, ``impl Trait``, ``dyn Trait``, qualified paths,
        function pointers and placeholders resolve to ``None``.
        """
        if isinstance(ty, ResolvedPath):
            return self.resolve_path_iri(ty)
        if isinstance(ty, PrimitiveType):
            return self.iris.primitive_type_iri(ty.name)
        if isinstance(ty, TupleType):
            return self.iris.tuple_type_iri(len(ty.elements))
        if isinstance(ty, SliceType):
            return self.iris.slice_type_iri(type_display_name(ty.element))
        if isinstance(ty, ArrayType):
            return self.iris.array_type_iri(type_display_name(ty.element), ty.length)
        if isinstance(ty, RawPointerType):
            return self.iris.raw_pointer_type_iri(type_display_name(ty.target), ty.is_mutable)
        if isinstance(ty, BorrowedRefType):
            return self.iris.ref_type_iri(type_display_name(ty.target), ty.is_mutable)
        self.stats.unresolved_types += 1
        return None

    def resolve_path_iri(self, path: ResolvedPath) -> str:
        """
        Resolve a named path to a type IRI.

        Lookup order: the ``paths`` summary table (full path), then the local
        index (the item's own name), then the path string as written.
        """
        if path.id is not None:
            summary = self.crate.paths.get(path.id)
            if summary is not None:
                return self.iris.type_iri(self.crate_name, self.crate_version, summary.full_path)
            local = self.crate.index.get(path.id)
            if local is not None and local.name:
                return self.iris.type_iri(self.crate_name, self.crate_version, local.name)
        return self.iris.type_iri(self.crate_name, self.crate_version, path.path)
