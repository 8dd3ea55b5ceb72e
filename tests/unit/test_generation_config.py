from domain.entities.generation_config import (DEFAULT_GENERATION_CONFIG,
                                               GenerationConfig,
                                               resolve_generation_config)


class TestResolveGenerationConfig:
    """生成パラメータのマージのテスト"""

    def test_defaults_when_no_override(self):
        config = resolve_generation_config()
        assert config == GenerationConfig(temperature=0.3, top_p=0.3, top_k=20, max_output_tokens=2048)
        assert config == DEFAULT_GENERATION_CONFIG

    def test_full_override(self):
        custom = GenerationConfig(temperature=0.9, top_p=0.8, top_k=50, max_output_tokens=4096)
        assert resolve_generation_config(custom) == custom

    def test_partial_override_keeps_other_defaults(self):
        config = resolve_generation_config(GenerationConfig(temperature=0.5))
        assert config.temperature == 0.5
        assert config.top_p == 0.3
        assert config.top_k == 20
        assert config.max_output_tokens == 2048

    def test_none_fields_are_dropped(self):
        config = resolve_generation_config(GenerationConfig(temperature=None, top_k=7, max_output_tokens=None))
        assert config.temperature == 0.3
        assert config.top_k == 7
        assert config.max_output_tokens == 2048

    def test_zero_is_a_real_override(self):
        config = resolve_generation_config(GenerationConfig(temperature=0.0, top_p=0.0))
        assert config.temperature == 0.0
        assert config.top_p == 0.0

    def test_custom_defaults(self):
        defaults = GenerationConfig(temperature=0.7, top_p=0.3, top_k=20, max_output_tokens=2048)
        config = resolve_generation_config(GenerationConfig(top_k=3), defaults=defaults)
        assert config.temperature == 0.7
        assert config.top_k == 3
