"""
IRI minting for Rust symbols.

Every graph entity is addressed by an IRI derived from stable name and path
components, never from an allocated counter, so the same crate always
produces the same IRIs. Free-text components are percent-escaped against the
RFC 3987 reserved delimiters plus control characters.
"""

from urllib.parse import quote

# Besides the always-safe ``A-Z a-z 0-9 - . _ ~``, only the backslash is left
# unescaped. Everything else in printable ASCII is a reserved delimiter,
# controls and non-ASCII UTF-8 bytes are always escaped.
_SAFE_CHARS = "\\"


def escape_iri_component(value: str) -> str:
    """Percent-escape a string for use as one IRI path segment."""
    return quote(value, safe=_SAFE_CHARS)


class IriMinter:
    """
    Generates consistent IRIs for Rust symbols in RDF graphs.

    Example:
        iris = IriMinter("http://rust.example/")
        iris.type_iri("serde", "1.0.0", "serde::de::Deserialize")
        # 'http://rust.example/type/serde/1.0.0/serde%3A%3Ade%3A%3ADeserialize'
    """

    def __init__(self, base_uri: str):
        self.base_uri = base_uri.rstrip("/")

    # -------------------------------------------------------------------------
    # Named entities
    # -------------------------------------------------------------------------

    def crate_iri(self, name: str, version: str) -> str:
        """IRI for a crate (``tg:Assembly`` / ``rt:Crate``)."""
        return f"{self.base_uri}/crate/{escape_iri_component(name)}/{escape_iri_component(version)}"

    def module_iri(self, crate_name: str, version: str, module_path: str) -> str:
        """IRI for a module (``tg:Namespace`` / ``rt:Module``)."""
        return (
            f"{self.base_uri}/module/{escape_iri_component(crate_name)}/"
            f"{escape_iri_component(version)}/{escape_iri_component(module_path)}"
        )

    def type_iri(self, crate_name: str, version: str, full_path: str) -> str:
        """IRI for a struct, enum, trait, union or type alias."""
        return (
            f"{self.base_uri}/type/{escape_iri_component(crate_name)}/"
            f"{escape_iri_component(version)}/{escape_iri_component(full_path)}"
        )

    def member_iri(self, owner_iri: str, name: str, signature: str = "") -> str:
        """IRI for a method, field, constant or associated item."""
        if not signature:
            return f"{owner_iri}/member/{escape_iri_component(name)}"
        return f"{owner_iri}/member/{escape_iri_component(name)}({escape_iri_component(signature)})"

    def parameter_iri(self, method_iri: str, ordinal: int) -> str:
        return f"{method_iri}/param/{ordinal}"

    def type_parameter_iri(self, owner_iri: str, ordinal: int) -> str:
        return f"{owner_iri}/typeparam/{ordinal}"

    def lifetime_iri(self, owner_iri: str, name: str) -> str:
        clean_name = name[1:] if name.startswith("'") else name
        return f"{owner_iri}/lifetime/{escape_iri_component(clean_name)}"

    def variant_iri(self, enum_iri: str, name: str) -> str:
        return f"{enum_iri}/variant/{escape_iri_component(name)}"

    def impl_iri(self, crate_name: str, version: str, impl_id: str) -> str:
        """IRI for an impl block, keyed by its rustdoc item ID."""
        return (
            f"{self.base_uri}/impl/{escape_iri_component(crate_name)}/"
            f"{escape_iri_component(version)}/{escape_iri_component(impl_id)}"
        )

    # -------------------------------------------------------------------------
    # Anonymous and composite types
    # -------------------------------------------------------------------------

    def primitive_type_iri(self, name: str) -> str:
        return f"{self.base_uri}/type/_primitive_/{escape_iri_component(name)}"

    def tuple_type_iri(self, element_count: int) -> str:
        return f"{self.base_uri}/type/_tuple_/{element_count}"

    def slice_type_iri(self, element_type_name: str) -> str:
        return f"{self.base_uri}/type/_slice_/{escape_iri_component(element_type_name)}"

    def array_type_iri(self, element_type_name: str, length: str) -> str:
        return (
            f"{self.base_uri}/type/_array_/{escape_iri_component(element_type_name)}/"
            f"{escape_iri_component(length)}"
        )

    def ref_type_iri(self, target_type_name: str, mutable: bool) -> str:
        mutability = "mut" if mutable else "ref"
        return f"{self.base_uri}/type/_{mutability}_/{escape_iri_component(target_type_name)}"

    def raw_pointer_type_iri(self, target_type_name: str, mutable: bool) -> str:
        mutability = "mut" if mutable else "const"
        return f"{self.base_uri}/type/_ptr_{mutability}_/{escape_iri_component(target_type_name)}"
