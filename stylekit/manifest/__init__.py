"""Manifest module - consumer-facing summary of a design system.

Example usage:
    >>> from stylekit.manifest import generate_manifest
    >>> manifest = generate_manifest(system)
    >>> manifest.model_dump(by_alias=True)["designSystem"]
    'Acme'
"""

from .lib import (
    ComponentManifest,
    ExampleSet,
    PropertyManifest,
    SystemManifest,
    component_description,
    generate_component_manifest,
    generate_examples,
    generate_manifest,
    generate_semantic_descriptions,
    generate_usage_guide,
)

__all__ = [
    # Models
    "PropertyManifest",
    "ExampleSet",
    "ComponentManifest",
    "SystemManifest",
    # Generation
    "component_description",
    "generate_examples",
    "generate_component_manifest",
    "generate_semantic_descriptions",
    "generate_manifest",
    # Guide
    "generate_usage_guide",
]
