from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class GenerationConfig:
    """LLMのサンプリングパラメータ (未指定の項目はデフォルト値で補完される)"""

    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    max_output_tokens: Optional[int] = None


DEFAULT_GENERATION_CONFIG = GenerationConfig(
    temperature=0.3,
    top_p=0.3,
    top_k=20,
    max_output_tokens=2048,
)


def resolve_generation_config(
    custom: Optional[GenerationConfig] = None,
    defaults: GenerationConfig = DEFAULT_GENERATION_CONFIG,
) -> GenerationConfig:
    """Merge a partial config over the defaults.

    Fields left as None in ``custom`` are dropped before merging, so they
    never mask a default.
    """
    merged = asdict(defaults)
    if custom is not None:
        merged.update({key: value for key, value in asdict(custom).items() if value is not None})
    return GenerationConfig(**merged)
