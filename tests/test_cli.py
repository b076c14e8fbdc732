import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from markov_chain.cli import main
from markov_chain.text import TextChain


class TestCli(unittest.TestCase):
    def setUp(self):
        self.td = tempfile.TemporaryDirectory()
        self.addCleanup(self.td.cleanup)

    def write_corpus(self, text, name="input.txt"):
        path = os.path.join(self.td.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def run_main(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = main(argv)
        return rc, out.getvalue(), err.getvalue()

    def test_generate_prints_requested_count(self):
        path = self.write_corpus("I like cats\nI hate cats\n")
        rc, out, _ = self.run_main(["generate", "--input", path, "--count", "4", "--random-seed", "0"])
        self.assertEqual(rc, 0)
        lines = out.splitlines()
        self.assertEqual(len(lines), 4)
        for line in lines:
            self.assertIn(line, ["I like cats", "I hate cats"])

    def test_generate_is_reproducible_with_random_seed(self):
        path = self.write_corpus("a b c\na c b\nb a c\n")
        argv = ["generate", "--input", path, "--count", "10", "--random-seed", "42"]
        self.assertEqual(self.run_main(argv)[1], self.run_main(argv)[1])

    def test_generate_from_seed_word(self):
        path = self.write_corpus("I like cats\ncats are cute\n")
        rc, out, _ = self.run_main(["generate", "--input", path, "--count", "3", "--seed", "cats"])
        self.assertEqual(rc, 0)
        for line in out.splitlines():
            self.assertIn(line, ["cats", "cats are cute"])

    def test_generate_higher_order(self):
        path = self.write_corpus("the cat sat\nthe cat ran\n")
        rc, out, _ = self.run_main(["generate", "--input", path, "--order", "2"])
        self.assertEqual(rc, 0)
        self.assertIn(out.strip(), ["the cat sat", "the cat ran"])

    def test_missing_input(self):
        rc, out, err = self.run_main(["generate", "--input", os.path.join(self.td.name, "nope.txt")])
        self.assertEqual(rc, 2)
        self.assertEqual(out, "")
        self.assertIn("cannot read", err)

    def test_empty_corpus(self):
        path = self.write_corpus("\n   \n")
        rc, _, err = self.run_main(["generate", "--input", path])
        self.assertEqual(rc, 1)
        self.assertIn("contains no words", err)

    def test_invalid_order(self):
        path = self.write_corpus("a b\n")
        rc, _, err = self.run_main(["generate", "--input", path, "--order", "0"])
        self.assertEqual(rc, 2)
        self.assertIn("--order", err)

    def test_serve_trains_then_starts_server(self):
        path = self.write_corpus("a b\n")
        with patch("markov_chain.cli.serve") as serve:
            rc, _, _ = self.run_main(["serve", "--input", path, "--port", "9999"])
        self.assertEqual(rc, 0)
        chain, config = serve.call_args[0]
        self.assertIsInstance(chain, TextChain)
        self.assertFalse(chain.is_empty())
        self.assertEqual(config, {"host": "127.0.0.1", "port": 9999})


if __name__ == '__main__':
    unittest.main()
