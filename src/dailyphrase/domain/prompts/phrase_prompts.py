"""Prompt template for phrase generation"""

from typing import Iterable, Optional

from dailyphrase.domain.models.phrase import PhraseCategory


class PhrasePromptBuilder:
    """Builder for phrase generation prompts"""

    DEFAULT_PHRASE_PROMPT = """Eres un poeta cuyo único objetivo es elevar el espíritu del lector. Debes generar una sola frase que sea profundamente positiva y excepcionalmente concisa, enfocada en un único sentimiento inspirador.

La frase debe combinar uno de los siguientes elementos: hacer un cumplido, recordar algo importante o desear suerte.

Tu respuesta debe ser un objeto JSON que contenga exactamente dos claves:
1. **category**: (El sentimiento principal de la frase, debe ser uno de: {categories}).
2. **message**: (La frase generada).

Asegúrate de que la frase sea directa y poética, y que no exceda las {max_words} palabras.

---

Ejemplo de salida requerida:

{{
"category": "Fuerza",
"message": "Tu luz interior puede guiar al universo entero; ¡brilla hoy con esa fuerza!"
}}"""

    def __init__(self, custom_prompt: Optional[str] = None, max_words: int = 15):
        """Initialize phrase prompt builder
        
        Args:
            custom_prompt: Custom prompt template (uses default if None)
            max_words: Word limit announced to the model
        """
        self.template = custom_prompt or self.DEFAULT_PHRASE_PROMPT
        self.max_words = max_words

    def build(self, categories: Optional[Iterable[str]] = None) -> str:
        """Build the generation prompt

        Args:
            categories: Allowed categories (defaults to all PhraseCategory values)

        Returns:
            Formatted prompt string
        """
        names = list(categories) if categories else [c.value for c in PhraseCategory]
        quoted = ", ".join(f'"{name}"' for name in names[:-1])
        listing = f'{quoted}, o "{names[-1]}"' if quoted else f'"{names[-1]}"'
        return self.template.format(categories=listing, max_words=self.max_words)
