"""Tests for media URLs and configuration."""

import pytest

from curriculum import config
from curriculum.media import media_url, upload_url


class TestMediaUrls:
    """Test CDN URL templates."""

    def test_video_poster_url(self):
        """Video references map to a .jpg poster."""
        assert media_url("lessons/intro", "video", cloud_name="demo") == (
            "https://res.cloudinary.com/demo/video/upload/lessons/intro.jpg"
        )

    def test_image_url(self):
        """Image references use the image path."""
        assert media_url("logo", "image", cloud_name="demo") == (
            "https://res.cloudinary.com/demo/image/upload/logo.jpg"
        )

    def test_upload_url(self):
        """Upload endpoint follows the API naming convention."""
        assert upload_url("video", cloud_name="demo") == "https://api.cloudinary.com/v1_1/demo/video/upload"

    def test_unknown_kind_rejected(self):
        """Only image and video are valid kinds."""
        with pytest.raises(ValueError):
            media_url("x", "audio", cloud_name="demo")

    def test_cloud_name_from_env(self, monkeypatch):
        """The configured cloud name is used by default."""
        monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "envcloud")
        assert media_url("x").startswith("https://res.cloudinary.com/envcloud/video/")

    def test_missing_cloud_name(self):
        """An unconfigured cloud name is a ValueError."""
        with pytest.raises(ValueError, match="CLOUDINARY_CLOUD_NAME"):
            media_url("x")


class TestConfig:
    """Test configuration accessors."""

    def test_defaults(self):
        """Defaults apply when nothing is configured."""
        assert config.get_xp_per_level() == 100
        assert config.get_passing_score() == 0.75
        assert config.get_snapshot_dir() == config.PROJECT_ROOT / "data"

    def test_invalid_xp_per_level(self, monkeypatch):
        """Non-positive or non-numeric values are rejected."""
        monkeypatch.setenv("XP_PER_LEVEL", "0")
        with pytest.raises(ValueError):
            config.get_xp_per_level()
        monkeypatch.setenv("XP_PER_LEVEL", "lots")
        with pytest.raises(ValueError):
            config.get_xp_per_level()

    def test_firestore_credentials(self, monkeypatch):
        """Project id is required, API key optional."""
        with pytest.raises(ValueError, match="FIRESTORE_PROJECT_ID"):
            config.get_firestore_credentials()
        monkeypatch.setenv("FIRESTORE_PROJECT_ID", "proj")
        assert config.get_firestore_credentials() == ("proj", None)

    def test_alias_set_is_literal(self):
        """The AI tools alias set holds exactly the historical spellings."""
        assert config.AI_TOOLS_ALIASES == {
            "AI tools", "AI Tools", "ai tools", "Artificial Intelligence", "artificial intelligence",
        }
