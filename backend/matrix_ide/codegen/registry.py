"""Generator registry keyed by language name and aliases."""
from .base import CodeGenerator

DEFAULT_LANGUAGE = "python"


class GeneratorRegistry:
    _generators: dict[str, type[CodeGenerator]] = {}
    _aliases: dict[str, str] = {}

    @classmethod
    def register(cls, generator_cls: type[CodeGenerator]) -> type[CodeGenerator]:
        """Class decorator; registers the generator under LANGUAGE and ALIASES."""
        language = generator_cls.LANGUAGE
        cls._generators[language] = generator_cls
        cls._aliases[language] = language
        for alias in generator_cls.ALIASES:
            cls._aliases[alias] = language
        return generator_cls

    @classmethod
    def resolve(cls, language: str | None) -> str:
        """Canonical language for ``language``; unknown names map to the default."""
        key = (language or "").strip().lower()
        return cls._aliases.get(key, DEFAULT_LANGUAGE)

    @classmethod
    def get(cls, language: str | None) -> CodeGenerator:
        return cls._generators[cls.resolve(language)]()

    @classmethod
    def languages(cls) -> dict[str, list[str]]:
        return {
            lang: sorted(a for a, target in cls._aliases.items() if target == lang and a != lang)
            for lang in cls._generators
        }
