"""specmodel -- Resolve OpenAPI 3.0 documents into a typed model for code generation.

A raw document is fetched and decoded, every same-document ``$ref`` is
replaced by the content it points to (circular references are left as
markers), and the result is parsed into frozen pydantic models.

Typical workflow::

    import specmodel

    spec = specmodel.load("openapi.yaml")
    for path in spec.paths:
        for operation in path.operations:
            print(operation.method.value, path.path)

Modules:
    models: Pydantic models for the specification and schema tree.
    parser: Loading, reference resolution and model building.
    naming: Parameter and type name normalisation.
    helpers: Queries code generation templates run against the model.
    config: Resolver/parser settings with precedence resolution.
    exceptions: Exception hierarchy.
"""

from specmodel.pipeline import load

__version__ = "0.1.0"

__all__ = ["load"]
