from .builder import PROMPT_TEMPLATE, GenerationRequest, build_prompt

__all__ = ["PROMPT_TEMPLATE", "GenerationRequest", "build_prompt"]
