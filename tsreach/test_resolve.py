import unittest

from tsreach.resolve import canonicalize, is_relative, resolve_specifier


class CanonicalizeTests(unittest.TestCase):
    def test_folds_dot_segments_and_slashes(self):
        self.assertEqual(canonicalize("./src/../lib//utils.ts"), "lib/utils.ts")
        self.assertEqual(canonicalize("src\\app\\page.tsx"), "src/app/page.tsx")
        self.assertEqual(canonicalize("a/b/../../c.ts"), "c.ts")

    def test_keeps_leading_parent_segments(self):
        self.assertEqual(canonicalize("../outside.ts"), "../outside.ts")

    def test_empty_and_current_dir(self):
        self.assertEqual(canonicalize(""), ".")
        self.assertEqual(canonicalize("./"), ".")


class ResolveSpecifierTests(unittest.TestCase):
    FILES = frozenset(
        {
            "index.ts",
            "utils.ts",
            "legacy.js",
            "component.jsx",
            "view.tsx",
            "lib/index.ts",
            "deep/folder/module.ts",
            "data.json",
            "config.dev.ts",
            "both.ts",
            "both.js",
        }
    )

    def resolve(self, from_path, spec):
        return resolve_specifier(from_path, spec, self.FILES)

    def test_non_relative_specifiers_are_external(self):
        self.assertFalse(is_relative("react"))
        self.assertIsNone(self.resolve("index.ts", "react"))
        self.assertIsNone(self.resolve("index.ts", "@scope/pkg"))
        self.assertIsNone(self.resolve("index.ts", "utils"))

    def test_extension_order(self):
        self.assertEqual(self.resolve("index.ts", "./utils"), "utils.ts")
        self.assertEqual(self.resolve("index.ts", "./view"), "view.tsx")
        self.assertEqual(self.resolve("index.ts", "./legacy"), "legacy.js")
        self.assertEqual(self.resolve("index.ts", "./component"), "component.jsx")
        self.assertEqual(self.resolve("index.ts", "./both"), "both.ts")

    def test_written_extension_is_substituted_first(self):
        # TS projects import `./utils.js` for a `utils.ts` source.
        self.assertEqual(self.resolve("index.ts", "./utils.js"), "utils.ts")
        self.assertEqual(self.resolve("index.ts", "./legacy.js"), "legacy.js")
        self.assertEqual(self.resolve("index.ts", "./component.jsx"), "component.jsx")

    def test_unknown_suffix_is_extended_then_taken_literally(self):
        self.assertEqual(self.resolve("index.ts", "./config.dev"), "config.dev.ts")
        self.assertEqual(self.resolve("index.ts", "./data.json"), "data.json")

    def test_directory_index(self):
        self.assertEqual(self.resolve("index.ts", "./lib"), "lib/index.ts")
        self.assertEqual(self.resolve("deep/folder/module.ts", "../../lib"), "lib/index.ts")
        self.assertEqual(self.resolve("lib/index.ts", "."), "lib/index.ts")

    def test_parent_relative(self):
        self.assertEqual(self.resolve("deep/folder/module.ts", "../../utils"), "utils.ts")

    def test_missing_target(self):
        self.assertIsNone(self.resolve("index.ts", "./missing"))
        self.assertIsNone(self.resolve("index.ts", "../utils"))
        self.assertIsNone(resolve_specifier("index.ts", "./utils", frozenset()))

    def test_is_pure(self):
        first = self.resolve("deep/folder/module.ts", "../../utils")
        second = self.resolve("deep/folder/module.ts", "../../utils")
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
