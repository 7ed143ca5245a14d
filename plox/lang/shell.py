"""Handles interactive/command-line mode for the plox interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """plox interpreter shell. Every line is run in the same Session, so variables and functions stick around."""
    intro = "plox :: tree-walking interpreter, Python backend\nType 'help' for more information."
    prompt = "> "

    COMMANDS = {"help", "exit", "EOF"}  # handled by the shell only when they are the whole line

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def parseline(self, line):
        """Splits off a shell command only if the line is exactly one. Anything else (including 'exit = 2;') is plox
        code and goes to default.
        """
        if line.strip() in Shell.COMMANDS:
            return super().parseline(line.strip())
        return None, None, line

    def default(self, line):
        """Runs an arbitrary line of plox code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.run(line)
        self.sess.error_handler.reset()

    def do_help(self, arg):
        """Doesn't return docs, but rather a short intro."""
        print("Welcome to the plox interpreter!\n\n"
              "plox is a small dynamically-typed scripting language with C-like syntax, lexical \n"
              "scoping and first-class functions. Each line you type is run right away, and \n"
              "everything you define stays available for the following lines.\n\n"
              "Try it out by typing 'fun sq(x) { return x * x; }'. Next, try typing \n"
              "'print sq(4);'. This will print 16. Type 'exit' to leave.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return True

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
