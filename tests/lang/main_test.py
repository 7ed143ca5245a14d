import contextlib
import io
import os
import tempfile
import unittest

from plox.main import CANT_CREATE_EXIT, FRAMES_PER_CALL, HOST_RECURSION_LIMIT, NO_INPUT_EXIT, USAGE_EXIT, main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.addCleanup(self.directory.cleanup)

    def script(self, source):
        path = os.path.join(self.directory.name, "script.lox")
        with open(path, "w", encoding="utf-8") as file:
            file.write(source)
        return path

    def run_main(self, argv):
        """Returns (exit status, stdout, stderr) of main(argv)."""
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            status = main(argv)
        return status, out.getvalue(), err.getvalue()

    def test_exit_status(self):
        cases = {
            'print "ok";': 0,
            "print 1 +;": 65,
            'print "a" < 1;': 70,
            "fun f() { f(); } f();": 70,
        }
        for source, expected in cases.items():
            status, __, __ = self.run_main([self.script(source)])
            self.assertEqual(expected, status, source)

    def test_output(self):
        path = self.script("var a = \"global\";\n{\n  fun show() { print a; }\n  show();\n}\nprint clock() > 0;\n")
        status, out, err = self.run_main([path])
        self.assertEqual(0, status)
        self.assertEqual("global\ntrue\n", out)
        self.assertEqual("", err)

    def test_runtime_error_keeps_earlier_output(self):
        status, out, err = self.run_main([self.script("print 1;\nprint -\"x\";\nprint 2;")])
        self.assertEqual(70, status)
        self.assertEqual("1\n", out)
        self.assertIn("[line 2]", err)

    def test_deep_nesting_is_static_error(self):
        status, out, err = self.run_main([self.script("print " + "(" * 5000 + "1" + ")" * 5000 + ";")])
        self.assertEqual((65, ""), (status, out))
        self.assertIn("Too much nesting.", err)
        self.assertNotIn("Runtime error", err)

    def test_usage(self):
        status, out, __ = self.run_main(["one.lox", "two.lox"])
        self.assertEqual(USAGE_EXIT, status)
        self.assertIn("Usage: plox [script]", out)

    def test_missing_script(self):
        status, __, err = self.run_main([os.path.join(self.directory.name, "missing.lox")])
        self.assertEqual(NO_INPUT_EXIT, status)
        self.assertIn("can't open", err)

    def test_undecodable_script(self):
        path = os.path.join(self.directory.name, "latin1.lox")
        with open(path, "wb") as file:
            file.write(b'print "\xff";')

        status, out, err = self.run_main([path])
        self.assertEqual((NO_INPUT_EXIT, ""), (status, out))
        self.assertIn("can't decode", err)

    def test_unwritable_log_file(self):
        log_file = os.path.join(self.directory.name, "missing", "plox.log")
        status, __, err = self.run_main(["--log-file", log_file, self.script("print 1;")])
        self.assertEqual(CANT_CREATE_EXIT, status)
        self.assertIn("can't open log file", err)

    def test_dumps(self):
        path = self.script("print -1;")

        status, out, __ = self.run_main(["--tokens", path])
        self.assertEqual(0, status)
        self.assertEqual("PRINT print\nMINUS -\nNUMBER 1 1.0\nSEMICOLON ;\nEOF\n", out)

        status, out, __ = self.run_main(["--ast", path])
        self.assertEqual(0, status)
        self.assertEqual("(print (- 1))\n", out)

        status, out, __ = self.run_main(["--ast", self.script("print -;")])
        self.assertEqual(65, status)
        self.assertEqual("", out)

    def test_max_depth(self):
        source = "fun down(n) { if (n > 0) down(n - 1); }\ndown(100);\nprint \"done\";"
        status, out, __ = self.run_main([self.script(source)])
        self.assertEqual((0, "done\n"), (status, out))

        status, out, err = self.run_main(["--max-depth", "50", self.script(source)])
        self.assertEqual((70, ""), (status, out))
        self.assertIn("Stack overflow.", err)

    def test_max_depth_capped(self):
        cap = HOST_RECURSION_LIMIT // FRAMES_PER_CALL
        source = "fun down(n) { if (n > 0) down(n - 1); }\ndown(" + str(cap + 50) + ");"
        status, out, err = self.run_main(["--max-depth", "1000000", self.script(source)])
        self.assertEqual((70, ""), (status, out))
        self.assertIn(f"using {cap}", err)
        self.assertIn("Stack overflow.", err)


if __name__ == '__main__':
    unittest.main()
