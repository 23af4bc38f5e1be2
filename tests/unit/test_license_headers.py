import unittest
from pathlib import Path

import clmm

PACKAGE_DIR = Path(clmm.__file__).parent
HEADER = "# The MIT License (MIT)\n# Copyright © 2026 clmm-core contributors\n"


class TestLicenseHeaders(unittest.TestCase):
    def test_every_module_carries_the_project_header(self):
        modules = [path for path in sorted(PACKAGE_DIR.rglob("*.py")) if path.stat().st_size > 0]
        self.assertTrue(modules)
        for path in modules:
            with self.subTest(module=path.relative_to(PACKAGE_DIR).as_posix()):
                self.assertTrue(path.read_text(encoding="utf-8").startswith(HEADER))


if __name__ == "__main__":
    unittest.main()
