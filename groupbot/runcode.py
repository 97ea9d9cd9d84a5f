"""Run code snippets through an online compiler service."""

from __future__ import annotations

import json
import os
import urllib.error
import urllib.parse
import urllib.request

__all__ = [
    "RunCodeError",
    "clear_newline_suffix",
    "cut_too_long",
    "lookup_language",
    "template_for",
    "parse_result",
    "run_code",
    "API_URL",
    "LINE_LIMIT",
    "CHAR_LIMIT",
    "TRUNCATION_MARK",
]

API_URL = "https://tool.runoob.com/compile2.php"
LINE_LIMIT = 30
CHAR_LIMIT = 1000
TRUNCATION_MARK = "\n............\n............"
DEFAULT_TIMEOUT = 15.0

_HEADERS = {
    "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
    "Referer": "https://c.runoob.com/",
    "User-Agent": "Mozilla/5.0 (Windows NT 6.1; Win64; x64; rv:87.0) Gecko/20100101 Firefox/87.0",
}

_HELLO_JS = 'console.log("Hello World!");'
_HELLO_CPP = (
    "#include <iostream>\nusing namespace std;\n\nint main()\n{\n"
    '   cout << "Hello World";\n   return 0;\n}'
)
_HELLO_RUST = 'fn main() {\n    println!("Hello World!");\n}'
_HELLO_CS = (
    "using System;\nnamespace HelloWorldApplication\n{\n   class HelloWorld\n   {\n"
    "      static void Main(string[] args)\n      {\n"
    '         Console.WriteLine("Hello World!");\n      }\n   }\n}'
)
_HELLO_SHELL = "echo 'Hello World!'"
_HELLO_PY = 'print("Hello, World!")'
_HELLO_SWIFT = 'var myString = "Hello, World!"\nprint(myString)'
_HELLO_KOTLIN = 'fun main(args : Array<String>){\n    println("Hello World!")\n}'
_HELLO_TS = 'const hello : string = "Hello World!"\nconsole.log(hello)'
_HELLO_RUBY = 'puts "Hello World!";'

_TEMPLATES: dict[str, str] = {
    "py2": "print 'Hello World!'",
    "ruby": _HELLO_RUBY,
    "rb": _HELLO_RUBY,
    "php": "<?php\n\techo 'Hello World!';\n?>",
    "javascript": _HELLO_JS,
    "js": _HELLO_JS,
    "node.js": _HELLO_JS,
    "scala": 'object Main {\n  def main(args:Array[String])\n  {\n    println("Hello World!")\n  }\n\t\t\n}',
    "go": 'package main\n\nimport "fmt"\n\nfunc main() {\n   fmt.Println("Hello, World!")\n}',
    "c": '#include <stdio.h>\n\nint main()\n{\n   printf("Hello, World! \n");\n   return 0;\n}',
    "c++": _HELLO_CPP,
    "cpp": _HELLO_CPP,
    "java": (
        "public class HelloWorld {\n    public static void main(String []args) {\n"
        '       System.out.println("Hello World!");\n    }\n}'
    ),
    "rust": _HELLO_RUST,
    "rs": _HELLO_RUST,
    "c#": _HELLO_CS,
    "cs": _HELLO_CS,
    "csharp": _HELLO_CS,
    "shell": _HELLO_SHELL,
    "bash": _HELLO_SHELL,
    "erlang": '% escript will ignore the first line\n\nmain(_) ->\n    io:format("Hello World!~n").',
    "perl": 'print "Hello, World!\n";',
    "python": _HELLO_PY,
    "py": _HELLO_PY,
    "swift": _HELLO_SWIFT,
    "lua": _HELLO_SWIFT,
    "pascal": "runcode Hello;\nbegin\n  writeln ('Hello, world!')\nend.",
    "kotlin": _HELLO_KOTLIN,
    "kt": _HELLO_KOTLIN,
    "r": 'myString <- "Hello, World!"\nprint ( myString)',
    "vb": (
        "Module Module1\n\n    Sub Main()\n"
        '        Console.WriteLine("Hello World!")\n    End Sub\n\nEnd Module'
    ),
    "typescript": _HELLO_TS,
    "ts": _HELLO_TS,
}

_TABLE: dict[str, tuple[str, str]] = {
    "py2": ("0", "py"),
    "ruby": ("1", "rb"),
    "rb": ("1", "rb"),
    "php": ("3", "php"),
    "javascript": ("4", "js"),
    "js": ("4", "js"),
    "node.js": ("4", "js"),
    "scala": ("5", "scala"),
    "go": ("6", "go"),
    "c": ("7", "c"),
    "c++": ("7", "cpp"),
    "cpp": ("7", "cpp"),
    "java": ("8", "java"),
    "rust": ("9", "rs"),
    "rs": ("9", "rs"),
    "c#": ("10", "cs"),
    "cs": ("10", "cs"),
    "csharp": ("10", "cs"),
    "shell": ("10", "sh"),
    "bash": ("10", "sh"),
    "erlang": ("12", "erl"),
    "perl": ("14", "pl"),
    "python": ("15", "py3"),
    "py": ("15", "py3"),
    "swift": ("16", "swift"),
    "lua": ("17", "lua"),
    "pascal": ("18", "pas"),
    "kotlin": ("19", "kt"),
    "kt": ("19", "kt"),
    "r": ("80", "r"),
    "vb": ("84", "vb"),
    "typescript": ("1010", "ts"),
    "ts": ("1010", "ts"),
}


class RunCodeError(Exception):
    """Raised when the compiler service fails or the code reports errors."""


def clear_newline_suffix(text: str) -> str:
    """Strip every trailing ``\\n``."""
    return text.rstrip("\n")


def cut_too_long(text: str) -> str:
    """Truncate text past 30 line breaks or 1000 characters."""
    for index, char in enumerate(text):
        if char == "\n":
            count_up = True
        elif char == "\r":
            # a \r\n pair is counted once, by its \n
            count_up = not (index < len(text) - 1 and text[index + 1] == "\n")
        else:
            count_up = False
        if count_up:
            cut_too_long_count = _Counter.bump()
        else:
            cut_too_long_count = _Counter.value
        if cut_too_long_count > LINE_LIMIT or index > CHAR_LIMIT:
            _Counter.reset()
            return text[: max(index - 1, 0)] + TRUNCATION_MARK
    _Counter.reset()
    return text


class _Counter:
    """Line counter used while scanning; kept per call via reset."""

    value = 0

    @classmethod
    def bump(cls) -> int:
        cls.value += 1
        return cls.value

    @classmethod
    def reset(cls) -> None:
        cls.value = 0


def lookup_language(language: str) -> tuple[str, str]:
    """Service language id and file extension for a language name."""
    key = language.lower()
    try:
        return _TABLE[key]
    except KeyError:
        raise KeyError(f"unsupported language: {language}") from None


def template_for(language: str) -> str:
    """A hello-world template for a supported language."""
    key = language.lower()
    try:
        return _TEMPLATES[key]
    except KeyError:
        raise KeyError(f"unsupported language: {language}") from None


def parse_result(payload: str | bytes) -> str:
    """Extract the program output from the service's JSON reply."""
    content = json.loads(payload)
    if not isinstance(content, dict):
        content = {}
    errors = content.get("errors")
    errors = errors if isinstance(errors, str) else ""
    if errors != "\n\n":
        raise RunCodeError(cut_too_long(clear_newline_suffix(errors)))
    output = content.get("output")
    output = output if isinstance(output, str) else ""
    return cut_too_long(clear_newline_suffix(output))


def run_code(
    code: str, run_type: tuple[str, str], timeout: float = DEFAULT_TIMEOUT
) -> str:
    """Send code to the compiler service and return its output."""
    form = urllib.parse.urlencode(
        {
            "code": code,
            "token": os.environ.get("RUNCODE_TOKEN", "token"),
            "stdin": "",
            "language": run_type[0],
            "fileext": run_type[1],
        }
    ).encode("utf-8")
    request = urllib.request.Request(
        API_URL, data=form, headers=dict(_HEADERS), method="POST"
    )
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            if response.status != 200:
                raise RunCodeError("code not 200")
            body = response.read()
    except urllib.error.HTTPError as exc:
        raise RunCodeError("code not 200") from exc
    except OSError as exc:
        raise RunCodeError(str(exc)) from exc
    return parse_result(body)