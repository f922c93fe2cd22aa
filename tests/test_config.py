"""Tests for search and performance configuration."""

import dataclasses
from pathlib import Path

import pytest

from fastfind import PatternCompileError, PerformanceConfig, SearchConfig


class TestPerformanceConfig:
    """Limits and presets."""

    def test_defaults_are_valid(self):
        config = PerformanceConfig()
        assert config.validate() == []
        assert config.output_batch_size == 100

    def test_presets_are_valid(self):
        assert PerformanceConfig.low_memory().validate() == []
        assert PerformanceConfig.high_throughput().validate() == []
        assert PerformanceConfig.low_memory().max_pending > 0

    def test_flush_interval_may_be_disabled(self):
        assert PerformanceConfig(flush_interval=None).validate() == []

    @pytest.mark.parametrize("field_name,value", [
        ('max_concurrent', 0),
        ('enumeration_batch_size', -1),
        ('output_batch_size', 0),
        ('flush_interval', 0),
        ('max_pending', -5),
    ])
    def test_invalid_values_reported(self, field_name, value):
        config = PerformanceConfig(**{field_name: value})
        errors = config.validate()
        assert len(errors) == 1
        assert field_name in errors[0]

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            PerformanceConfig().max_concurrent = 1


class TestSearchConfig:
    """Construction from raw input and validation."""

    def test_from_raw_compiles_patterns(self, tmp_path):
        config = SearchConfig.from_raw(tmp_path, ['*.log', '*.txt'])

        assert config.root_path == str(tmp_path)
        assert config.patterns.raw_patterns == ['*.log', '*.txt']
        assert config.patterns.matches('A.LOG')
        assert config.include_directories is False
        assert config.follow_symlinks is False
        assert config.validate() == []

    def test_from_raw_regex(self, tmp_path):
        config = SearchConfig.from_raw(str(tmp_path), [r'\d{3}'], regex=True)
        assert config.patterns.matches('file123')

    def test_from_raw_bad_regex_raises(self, tmp_path):
        with pytest.raises(PatternCompileError):
            SearchConfig.from_raw(tmp_path, ['(oops'], regex=True)

    def test_missing_root_reported(self, tmp_path):
        config = SearchConfig.from_raw(tmp_path / 'absent', ['*'])
        errors = config.validate()
        assert len(errors) == 1
        assert 'absent' in errors[0]

    def test_file_root_reported(self, tmp_path):
        file_path = tmp_path / 'plain.txt'
        file_path.write_text('x')
        assert SearchConfig.from_raw(file_path, ['*']).validate()

    def test_empty_root_reported(self):
        errors = SearchConfig.from_raw('', ['*']).validate()
        assert errors == ["root path cannot be empty"]

    def test_no_patterns_reported(self, tmp_path):
        errors = SearchConfig.from_raw(tmp_path, []).validate()
        assert errors == ["at least one pattern is required"]

    def test_performance_problems_included(self, tmp_path):
        config = SearchConfig.from_raw(
            tmp_path, ['*'], performance=PerformanceConfig(max_concurrent=0)
        )
        assert config.validate() == ["max_concurrent must be positive"]

    def test_accepts_pathlike_root(self, tmp_path):
        config = SearchConfig.from_raw(Path(tmp_path), ['*'])
        assert isinstance(config.root_path, str)

    def test_frozen(self, tmp_path):
        config = SearchConfig.from_raw(tmp_path, ['*'])
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.include_directories = True
