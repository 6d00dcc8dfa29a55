from __future__ import annotations

from pathlib import Path
import os
import tempfile
import unittest

from cibuild.paths import RootResolutionError, resolve_layout


class ResolveLayoutTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.base = Path(self.temp_dir.name).resolve()
        self.root = self.base / "node"
        self.ci_dir = self.root / "ci"
        self.ci_dir.mkdir(parents=True)
        self.script = self.ci_dir / "build.py"
        self.script.write_text("")
        self.elsewhere = self.base / "elsewhere"
        self.elsewhere.mkdir()

        original_cwd = os.getcwd()
        self.addCleanup(os.chdir, original_cwd)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_absolute_script_path(self) -> None:
        layout = resolve_layout(self.script)
        self.assertEqual(layout.root, self.root)
        self.assertEqual(layout.script_dir, self.ci_dir)

    def test_relative_path_from_unrelated_directory(self) -> None:
        os.chdir(self.elsewhere)
        layout = resolve_layout(os.path.join("..", "node", "ci", "build.py"))
        self.assertEqual(layout.root, self.root)
        self.assertTrue(layout.root.is_absolute())

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks unavailable")
    def test_symlink_is_followed_to_real_script(self) -> None:
        link = self.elsewhere / "build-link.py"
        try:
            link.symlink_to(self.script)
        except OSError:
            self.skipTest("cannot create symlinks")
        self.assertEqual(resolve_layout(link).root, self.root)

    def test_missing_script_is_fatal(self) -> None:
        with self.assertRaises(RootResolutionError):
            resolve_layout(self.ci_dir / "missing.py")

    def test_root_override(self) -> None:
        layout = resolve_layout(self.script, root_override=self.elsewhere)
        self.assertEqual(layout.root, self.elsewhere)
        self.assertEqual(layout.script_dir, self.ci_dir)

    def test_root_override_must_be_directory(self) -> None:
        with self.assertRaises(RootResolutionError):
            resolve_layout(self.script, root_override=self.base / "nope")
        with self.assertRaises(RootResolutionError):
            resolve_layout(self.script, root_override=self.script)


if __name__ == "__main__":
    unittest.main()
