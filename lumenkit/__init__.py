"""Scattering models, microfacet and Fresnel terms, textures and participating media for physically based rendering."""

__version__ = "0.1.0"