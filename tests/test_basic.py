"""
Basic tests for the Tubelist application.
"""
import unittest
import sys
import os

# Add the parent directory to the path so we can import the application modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

class BasicTests(unittest.TestCase):
    """Basic test cases."""

    def test_import(self):
        """Test that the main modules can be imported."""
        try:
            import main
            import models
            import services.engine
            import services.youtube_api
            self.assertTrue(True)
        except ImportError as e:
            self.fail(f"Import failed: {e}")

    def test_environment(self):
        """Test that the packaging files and frontend are present."""
        root = os.path.join(os.path.dirname(__file__), '..')
        self.assertTrue(os.path.exists(os.path.join(root, 'README.md')))
        self.assertTrue(os.path.exists(os.path.join(root, 'requirements.txt')))
        self.assertTrue(os.path.exists(os.path.join(root, 'static', 'index.html')))

    def test_version_metadata(self):
        """Test the package metadata exposed by version.py."""
        import version
        self.assertRegex(version.__version__, r"^\d+\.\d+\.\d+$")
        self.assertEqual(version.__author__, "Tubelist contributors")

    def test_config_defaults(self):
        """Test the default configuration without reading the environment."""
        from config import Config
        settings = Config(load_from_env=False)
        self.assertEqual(settings.BATCH_SIZE, 50)
        self.assertEqual(settings.PLAYLIST_PAGE_SIZE, 50)
        self.assertEqual(settings.SHORTS_MAX_SECONDS, 60)
        self.assertEqual(settings.PORT, 3000)
        self.assertEqual(settings.API_KEY, "")

    def test_config_from_env(self):
        """Test that environment variables override defaults."""
        from unittest.mock import patch
        from config import Config
        env = {"YOUTUBE_API_KEY": "key-123", "PORT": "8080", "BATCH_SIZE": "500", "API_TIMEOUT_SECONDS": "oops"}
        with patch.dict(os.environ, env):
            settings = Config(load_from_env=True)
        self.assertEqual(settings.API_KEY, "key-123")
        self.assertEqual(settings.PORT, 8080)
        # Out of range batch sizes fall back to the API maximum
        self.assertEqual(settings.BATCH_SIZE, 50)
        self.assertEqual(settings.API_TIMEOUT_SECONDS, 20.0)

if __name__ == '__main__':
    unittest.main()
