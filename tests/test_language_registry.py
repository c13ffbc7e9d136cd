import threading
import unittest

import language_registry
from language_registry import SUPPORTED_LANGUAGES, LanguageRegistry


class LanguageRegistryTests(unittest.TestCase):
    def test_every_registered_name_has_a_code(self) -> None:
        registry = LanguageRegistry()

        for name in registry.all_language_names():
            self.assertTrue(registry.code_for(name), name)
            self.assertEqual(registry.code_for(name), registry.code_for(name))

    def test_known_codes(self) -> None:
        registry = LanguageRegistry()

        self.assertEqual(registry.code_for("English"), "en")
        self.assertEqual(registry.code_for("Korean"), "ko")
        self.assertEqual(registry.code_for("Chinese"), "zh-CN")
        self.assertEqual(registry.code_for("Hebrew"), "iw")

    def test_unknown_name_returns_empty_code(self) -> None:
        registry = LanguageRegistry()

        self.assertEqual(registry.code_for("Klingon"), "")
        self.assertEqual(registry.code_for("english"), "")
        self.assertNotIn("Klingon", registry)

    def test_names_are_sorted_and_unique(self) -> None:
        registry = LanguageRegistry()
        names = registry.all_language_names()

        self.assertEqual(len(names), len(registry))
        self.assertEqual(len(names), len(SUPPORTED_LANGUAGES))
        for previous, current in zip(names, names[1:]):
            self.assertLess(previous, current)

    def test_reverse_lookup(self) -> None:
        registry = LanguageRegistry()

        self.assertEqual(registry.name_for("ko"), "Korean")
        self.assertEqual(registry.name_for("tlh"), "")

    def test_initialization_is_lazy_and_idempotent(self) -> None:
        registry = LanguageRegistry()
        self.assertFalse(registry.initialized)

        first = registry.all_language_names()
        second = registry.all_language_names()

        self.assertTrue(registry.initialized)
        self.assertIs(first, second)
        self.assertEqual(len(registry), len(SUPPORTED_LANGUAGES))

    def test_concurrent_first_use_builds_a_single_table(self) -> None:
        registry = LanguageRegistry()
        barrier = threading.Barrier(8)
        seen = []

        def worker() -> None:
            barrier.wait()
            seen.append(registry.all_language_names())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(seen), 8)
        self.assertTrue(all(names is seen[0] for names in seen))

    def test_duplicate_entries_are_rejected(self) -> None:
        registry = LanguageRegistry([("English", "en"), ("English", "en-GB")])

        with self.assertRaises(ValueError):
            registry.code_for("English")

    def test_module_level_helpers_use_default_registry(self) -> None:
        self.assertEqual(language_registry.code_for("English"), "en")
        self.assertEqual(language_registry.name_for("en"), "English")
        self.assertIs(
            language_registry.all_language_names(),
            language_registry.default_registry().all_language_names(),
        )


if __name__ == "__main__":  # pragma: no cover - allows direct execution
    unittest.main()
