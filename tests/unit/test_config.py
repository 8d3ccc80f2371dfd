import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "installers" / "bootstrap"))

from devx_bootstrap.config import InstallerConfig


class ConfigTests(unittest.TestCase):
    def test_defaults(self):
        cfg = InstallerConfig()
        self.assertEqual(cfg.tool_name, "devx")
        self.assertEqual(cfg.repo, "dever-labs/dever")
        self.assertEqual(cfg.releases_page, "https://github.com/dever-labs/dever/releases")
        self.assertEqual(cfg.install_root.name, "bin")
        self.assertEqual(cfg.retries, 0)
        self.assertTrue(cfg.user_agent.startswith("devx-python-installer/"))

    def test_overrides_skip_none_and_clamp(self):
        cfg = InstallerConfig().with_overrides(version="1.2.0", repo=None, timeout_s=0, retries=-3)
        self.assertEqual(cfg.version, "1.2.0")
        self.assertEqual(cfg.repo, "dever-labs/dever")
        self.assertEqual(cfg.timeout_s, 1.0)
        self.assertEqual(cfg.retries, 0)
        self.assertFalse(cfg.pins_latest)

    def test_latest_sentinel(self):
        self.assertTrue(InstallerConfig(version="0.0.0").pins_latest)

    def test_install_root_is_resolved(self):
        cfg = InstallerConfig().with_overrides(install_root="relative/bin")
        self.assertTrue(cfg.install_root.is_absolute())


if __name__ == "__main__":
    unittest.main()
