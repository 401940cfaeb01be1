"""Tests for folio.catalog.config."""

from folio.catalog.config import SourceConfig, StatisticsConfig


class TestSourceConfig:
    def test_defaults(self):
        config = SourceConfig()
        assert config.file_extensions == [".md"]
        assert ".obsidian" in config.skip_directories
        assert config.encoding == "utf-8"

    def test_defaults_not_shared(self):
        a, b = SourceConfig(), SourceConfig()
        a.file_extensions.append(".txt")
        assert b.file_extensions == [".md"]


class TestStatisticsConfig:
    def test_defaults(self):
        config = StatisticsConfig()
        assert config.total_field == "word-count"
        assert config.distinct_fields == ["authors", "publications"]
        assert config.range_field == "year"

    def test_defaults_not_shared(self):
        a, b = StatisticsConfig(), StatisticsConfig()
        a.distinct_fields.remove("publications")
        assert b.distinct_fields == ["authors", "publications"]
