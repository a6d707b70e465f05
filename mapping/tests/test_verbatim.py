"""Tests for the full code extract."""

import os
import tempfile
import unittest
from pathlib import Path

from core.errors import FileIOError, RootNotFound
from core.settings import FullCodeExtractOptions
from mapping.document import CandidateFile
from mapping.verbatim import (
    build_verbatim_dump,
    output_name_for_path,
    read_raw_text,
    run_full_code_extract,
)


class TestBuildVerbatimDump(unittest.TestCase):
    def _dump(self, contents):
        files = [CandidateFile(path, ".cs") for path in contents]
        return build_verbatim_dump(
            "/src",
            files,
            include_subdirectories=True,
            extensions=(".cs", ".cshtml"),
            read_raw=contents.__getitem__,
        )

    def test_header(self):
        text = self._dump({})
        self.assertIn("-----8<----- [FILE START] <FULL_PATH> -----", text)
        self.assertIn("-----8<----- [FILE END]   <FULL_PATH> -----", text)
        self.assertIn("- File types included: .cs, .cshtml", text)
        self.assertIn("Root: /src\n", text)
        self.assertIn("Include subfolders: True\n", text)

    def test_newline_added_when_missing(self):
        text = self._dump({"/src/A.cs": "class A {}"})
        self.assertTrue(
            text.endswith(
                "-----8<----- [FILE START] /src/A.cs -----\n"
                "class A {}\n"
                "-----8<----- [FILE END]   /src/A.cs -----\n"
                "\n"
            )
        )

    def test_existing_line_endings_kept(self):
        for content in ("class A {}\n", "class A {}\r\n", "class A {}\r"):
            text = self._dump({"/src/A.cs": content})
            block = "-----8<----- [FILE START] /src/A.cs -----\n" + content + "-----8<----- [FILE END]   /src/A.cs -----\n\n"
            self.assertTrue(text.endswith(block), repr(content))

    def test_empty_file(self):
        text = self._dump({"/src/Empty.cs": ""})
        self.assertIn(
            "-----8<----- [FILE START] /src/Empty.cs -----\n\n-----8<----- [FILE END]   /src/Empty.cs -----\n",
            text,
        )

    def test_files_in_given_order(self):
        text = self._dump({"/src/B.cs": "b\n", "/src/A.cs": "a\n"})
        self.assertLess(text.index("[FILE START] /src/B.cs"), text.index("[FILE START] /src/A.cs"))


class TestOutputName(unittest.TestCase):
    def test_after_src(self):
        self.assertEqual(
            output_name_for_path("/work/Darwin/src/Darwin.Web/Areas/Admin"),
            "Darwin.Web.Areas.Admin.txt",
        )

    def test_src_match_is_case_insensitive(self):
        self.assertEqual(output_name_for_path("/work/SRC/Darwin.Domain/"), "Darwin.Domain.txt")

    def test_without_src(self):
        self.assertEqual(output_name_for_path("/work/Darwin"), "work.Darwin.txt")

    def test_invalid_characters_replaced(self):
        self.assertEqual(output_name_for_path('/src/a:b*c'), "a_b_c.txt")

    def test_fallback(self):
        self.assertEqual(output_name_for_path("/"), "FullCodeExtract.txt")
        self.assertEqual(output_name_for_path("/work/src/"), "work.src.txt")


class TestRunFullCodeExtract(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = os.path.join(self._tmp.name, "Project")
        self.out = os.path.join(self._tmp.name, "out")
        os.makedirs(os.path.join(self.root, "Views"))
        Path(self.root, "b.cs").write_bytes(b"class B {}\r\n")
        Path(self.root, "A.cs").write_bytes(b"\xef\xbb\xbfclass A {}")
        Path(self.root, "Views", "Index.cshtml").write_bytes(b"<p>caf\xe9</p>\n")
        Path(self.root, "site.js").write_bytes(b"var x;\n")

    def test_dump_is_byte_exact(self):
        path = run_full_code_extract(FullCodeExtractOptions(root_path=self.root), output_root=self.out)
        data = Path(path).read_bytes()

        self.assertEqual(os.path.dirname(path), self.out)
        self.assertIn(b"\xef\xbb\xbfclass A {}\n-----8<----- [FILE END]", data)
        self.assertIn(b"class B {}\r\n-----8<----- [FILE END]", data)
        self.assertIn(b"<p>caf\xe9</p>\n", data)
        self.assertNotIn(b"var x;", data)
        self.assertLess(data.index(b"A.cs -----"), data.index(b"b.cs -----"))
        self.assertLess(data.index(b"b.cs -----"), data.index(b"Index.cshtml -----"))

    def test_without_subdirectories(self):
        options = FullCodeExtractOptions(root_path=self.root, include_subdirectories=False)
        text = Path(run_full_code_extract(options, output_root=self.out)).read_bytes()

        self.assertNotIn(b"Index.cshtml -----", text)
        self.assertIn(b"Include subfolders: False", text)

    def test_missing_root(self):
        with self.assertRaises(RootNotFound):
            run_full_code_extract(
                FullCodeExtractOptions(root_path=os.path.join(self._tmp.name, "missing")),
                output_root=self.out,
            )
        self.assertFalse(os.path.exists(self.out))

    def test_read_raw_text_missing(self):
        with self.assertRaises(FileIOError):
            read_raw_text(os.path.join(self.root, "missing.cs"))


if __name__ == "__main__":
    unittest.main()
