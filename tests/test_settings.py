from __future__ import annotations

from pathlib import Path
import tempfile
import textwrap
import unittest

from cibuild.settings import (
    CargoBuildSettings,
    CiSettings,
    PermissionSettings,
    load_settings,
)


class SettingsDefaultsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = CiSettings()
        self.assertEqual(settings.log_level, "info")
        self.assertFalse(settings.dry_run)
        self.assertEqual(settings.build.program, "cargo")
        self.assertEqual(settings.build.features, ["masq_lib/no_test_share"])
        self.assertEqual(settings.permissions.target_dir, "target")
        self.assertEqual(settings.permissions.mode, "777")
        self.assertEqual(settings.permissions.elevate, ["sudo"])

    def test_empty_mapping_keeps_defaults(self) -> None:
        self.assertEqual(CiSettings.from_mapping({}), CiSettings())


class SettingsValidationTests(unittest.TestCase):
    def test_integer_mode_is_accepted(self) -> None:
        self.assertEqual(PermissionSettings.from_mapping({"mode": 775}).mode, "775")

    def test_invalid_mode_rejected(self) -> None:
        for mode in ("rwx", "78", "99999"):
            with self.subTest(mode=mode):
                with self.assertRaises(ValueError):
                    PermissionSettings.from_mapping({"mode": mode})

    def test_absolute_target_dir_rejected(self) -> None:
        with self.assertRaises(ValueError):
            PermissionSettings.from_mapping({"target_dir": "/var/target"})

    def test_empty_program_rejected(self) -> None:
        with self.assertRaises(ValueError):
            CargoBuildSettings.from_mapping({"program": " "})

    def test_section_must_be_table(self) -> None:
        with self.assertRaises(TypeError):
            CiSettings.from_mapping({"build": ["cargo"]})

    def test_unknown_log_level_rejected(self) -> None:
        with self.assertRaises(ValueError):
            CiSettings.from_mapping({"global": {"log_level": "trace"}})


class LoadSettingsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_dir = Path(self.temp_dir.name)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_without_config_file(self) -> None:
        settings = load_settings(self.config_dir, {})
        self.assertEqual(settings, CiSettings())
        self.assertIsNone(settings.source)

    def test_reads_config_file_from_directory(self) -> None:
        path = self.config_dir / "cibuild.toml"
        path.write_text(
            textwrap.dedent(
                """
                [global]
                log_level = "debug"

                [build]
                profile = "ci"
                features = ["masq_lib/no_test_share", "node/log_recipient_test"]
                environment = { RUSTFLAGS = "-D warnings" }

                [permissions]
                elevate = []
                """
            )
        )
        settings = load_settings(self.config_dir, {})

        self.assertEqual(settings.source, path)
        self.assertEqual(settings.log_level, "debug")
        self.assertEqual(settings.build.profile, "ci")
        self.assertEqual(settings.build.features, ["masq_lib/no_test_share", "node/log_recipient_test"])
        self.assertEqual(settings.build.environment, {"RUSTFLAGS": "-D warnings"})
        self.assertEqual(settings.permissions.elevate, [])
        self.assertEqual(settings.permissions.target_dir, "target")

    def test_explicit_config_path(self) -> None:
        other = Path(self.temp_dir.name) / "custom.json"
        other.write_text('{"global": {"dry_run": true}}', encoding="utf-8")
        settings = load_settings(self.config_dir / "absent", {"CIBUILD_CONFIG": str(other)})
        self.assertTrue(settings.dry_run)

    def test_explicit_config_path_must_exist(self) -> None:
        with self.assertRaises(ValueError):
            load_settings(self.config_dir, {"CIBUILD_CONFIG": str(self.config_dir / "missing.toml")})

    def test_environment_overrides_file(self) -> None:
        (self.config_dir / "cibuild.toml").write_text(
            textwrap.dedent(
                """
                [global]
                log_level = "debug"
                dry_run = true
                """
            )
        )
        settings = load_settings(
            self.config_dir,
            {
                "CIBUILD_LOG_LEVEL": "ERROR",
                "CIBUILD_DRY_RUN": "no",
                "CIBUILD_PROJECT_ROOT": "/srv/node",
            },
        )
        self.assertEqual(settings.log_level, "error")
        self.assertFalse(settings.dry_run)
        self.assertEqual(settings.project_root, "/srv/node")

    def test_invalid_environment_value(self) -> None:
        with self.assertRaises(ValueError):
            load_settings(self.config_dir, {"CIBUILD_DRY_RUN": "sometimes"})


if __name__ == "__main__":
    unittest.main()
