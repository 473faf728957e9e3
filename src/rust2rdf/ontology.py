"""
RDF vocabulary for the type graph ontology.

Two vocabularies are used:
- ``tg:`` (http://typegraph.example/ontology/) - shared cross-language classes
  and predicates, also used by the .NET extractor
- ``rt:`` (http://rust.example/ontology/) - Rust-specific extensions

Terms are built on ``rdflib.Namespace`` so they are ``URIRef`` values and can
be used directly with an rdflib ``Graph`` as well as with the streaming
emitters.
"""

from typing import Final

from rdflib import RDF, RDFS, XSD, Namespace, URIRef


class STANDARD:
    """Standard RDF/RDFS/XSD namespaces and terms."""

    RDF_NS: Final[str] = str(RDF)
    RDFS_NS: Final[str] = str(RDFS)
    XSD_NS: Final[str] = str(XSD)

    RDF_TYPE: Final[URIRef] = RDF.type
    RDFS_LABEL: Final[URIRef] = RDFS.label
    RDFS_SUBCLASS_OF: Final[URIRef] = RDFS.subClassOf
    XSD_STRING: Final[URIRef] = XSD.string
    XSD_BOOLEAN: Final[URIRef] = XSD.boolean
    XSD_INTEGER: Final[URIRef] = XSD.integer


class TG:
    """Shared type-graph ontology (``tg:`` prefix)."""

    PREFIX: Final[str] = "tg"
    NS: Final[Namespace] = Namespace("http://typegraph.example/ontology/")

    # Classes
    ASSEMBLY: Final[URIRef] = NS["Assembly"]
    NAMESPACE: Final[URIRef] = NS["Namespace"]
    TYPE: Final[URIRef] = NS["Type"]
    CLASS: Final[URIRef] = NS["Class"]
    STRUCT: Final[URIRef] = NS["Struct"]
    INTERFACE: Final[URIRef] = NS["Interface"]
    ENUM: Final[URIRef] = NS["Enum"]
    MEMBER: Final[URIRef] = NS["Member"]
    METHOD: Final[URIRef] = NS["Method"]
    FIELD: Final[URIRef] = NS["Field"]
    PARAMETER: Final[URIRef] = NS["Parameter"]
    TYPE_PARAMETER: Final[URIRef] = NS["TypeParameter"]
    ATTRIBUTE: Final[URIRef] = NS["Attribute"]

    # Type properties
    NAME: Final[URIRef] = NS["name"]
    FULL_NAME: Final[URIRef] = NS["fullName"]
    ACCESSIBILITY: Final[URIRef] = NS["accessibility"]
    IS_ABSTRACT: Final[URIRef] = NS["isAbstract"]
    IS_GENERIC: Final[URIRef] = NS["isGeneric"]

    # Type relationships
    DEFINED_IN_ASSEMBLY: Final[URIRef] = NS["definedInAssembly"]
    IN_NAMESPACE: Final[URIRef] = NS["inNamespace"]
    IMPLEMENTS: Final[URIRef] = NS["implements"]
    HAS_MEMBER: Final[URIRef] = NS["hasMember"]
    HAS_TYPE_PARAMETER: Final[URIRef] = NS["hasTypeParameter"]
    HAS_ATTRIBUTE: Final[URIRef] = NS["hasAttribute"]
    RELATED_TO: Final[URIRef] = NS["relatedTo"]

    # Member properties
    IS_ASYNC: Final[URIRef] = NS["isAsync"]
    IS_CONST: Final[URIRef] = NS["isConst"]

    # Member relationships
    MEMBER_OF: Final[URIRef] = NS["memberOf"]
    RETURN_TYPE: Final[URIRef] = NS["returnType"]
    FIELD_TYPE: Final[URIRef] = NS["fieldType"]
    HAS_PARAMETER: Final[URIRef] = NS["hasParameter"]

    # Parameter properties
    ORDINAL: Final[URIRef] = NS["ordinal"]
    PARAMETER_TYPE: Final[URIRef] = NS["parameterType"]
    PARAMETER_OF: Final[URIRef] = NS["parameterOf"]

    # Type parameter properties
    TYPE_PARAMETER_OF: Final[URIRef] = NS["typeParameterOf"]

    # Assembly properties
    VERSION: Final[URIRef] = NS["version"]
    LANGUAGE: Final[URIRef] = NS["language"]

    # Namespace relationships
    PARENT_NAMESPACE: Final[URIRef] = NS["parentNamespace"]


class RT:
    """Rust-specific extensions (``rt:`` prefix)."""

    PREFIX: Final[str] = "rt"
    NS: Final[Namespace] = Namespace("http://rust.example/ontology/")

    # Classes
    CRATE: Final[URIRef] = NS["Crate"]
    MODULE: Final[URIRef] = NS["Module"]
    TRAIT: Final[URIRef] = NS["Trait"]
    UNION: Final[URIRef] = NS["Union"]
    TYPE_ALIAS: Final[URIRef] = NS["TypeAlias"]
    ENUM_VARIANT: Final[URIRef] = NS["EnumVariant"]
    TRAIT_IMPL: Final[URIRef] = NS["TraitImpl"]
    INHERENT_IMPL: Final[URIRef] = NS["InherentImpl"]
    LIFETIME: Final[URIRef] = NS["Lifetime"]
    CONST_PARAM: Final[URIRef] = NS["ConstParam"]
    STATIC: Final[URIRef] = NS["Static"]
    CONSTANT: Final[URIRef] = NS["Constant"]

    # Predicates
    DEPENDS_ON: Final[URIRef] = NS["dependsOn"]
    SUPER_TRAIT: Final[URIRef] = NS["superTrait"]
    IMPL_FOR: Final[URIRef] = NS["implFor"]
    IMPL_TRAIT: Final[URIRef] = NS["implTrait"]
    HAS_VARIANT: Final[URIRef] = NS["hasVariant"]
    VARIANT_KIND: Final[URIRef] = NS["variantKind"]
    VARIANT_FIELD: Final[URIRef] = NS["variantField"]
    HAS_LIFETIME: Final[URIRef] = NS["hasLifetime"]
    IS_UNSAFE: Final[URIRef] = NS["isUnsafe"]
    IS_MUTABLE: Final[URIRef] = NS["isMutable"]
    ERROR_TYPE: Final[URIRef] = NS["errorType"]
    DERIVES: Final[URIRef] = NS["derives"]
    TRAIT_BOUND: Final[URIRef] = NS["traitBound"]


# Prefixes registered with every emitter, in registration order.
ONTOLOGY_PREFIXES = (
    ("rdf", STANDARD.RDF_NS),
    ("rdfs", STANDARD.RDFS_NS),
    ("xsd", STANDARD.XSD_NS),
    (TG.PREFIX, str(TG.NS)),
    (RT.PREFIX, str(RT.NS)),
)
