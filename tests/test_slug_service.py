import unittest

from app.services.slug_service import slugify


class TestSlugify(unittest.TestCase):
    def test_strips_punctuation_and_joins_words(self):
        self.assertEqual(slugify("Hello, World!!"), "hello-world")

    def test_blank_input_yields_empty_slug(self):
        self.assertEqual(slugify("   "), "")
        self.assertEqual(slugify(""), "")
        self.assertEqual(slugify(None), "")

    def test_fully_stripped_input_yields_empty_slug(self):
        self.assertEqual(slugify("***"), "")
        self.assertEqual(slugify("¿¡!?"), "")

    def test_collapses_whitespace_and_hyphen_runs(self):
        self.assertEqual(slugify("  Go   Concurrency -- Patterns  "), "go-concurrency-patterns")
        self.assertEqual(slugify("a---b"), "a-b")

    def test_keeps_digits_and_existing_hyphens(self):
        self.assertEqual(slugify("Top-10 Tips for 2024"), "top-10-tips-for-2024")

    def test_drops_non_ascii_letters(self):
        self.assertEqual(slugify("Café Crème"), "caf-crme")

    def test_is_idempotent(self):
        slug = slugify("Rust Memory: Ownership & Borrowing")
        self.assertEqual(slugify(slug), slug)


if __name__ == "__main__":
    unittest.main()
