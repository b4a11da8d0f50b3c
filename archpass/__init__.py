"""ArchPass: preset-based password generation with heuristic strength scoring."""

__version__ = "1.0.0"
GENERATOR_NAME = "Arch Password Generator API"
