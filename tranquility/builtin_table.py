"""Built-in functions of Tranquility.

The table is read-only. The scope tracker seeds the global scope with the
name and parameter count of every entry; the language server uses the
descriptions for hover text.


File: builtin_table.py
Version: 0.1.0
License: MIT
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BuiltinFunction:
    """A callable predefined by the Tranquility runtime."""

    name: str
    parameter_count: int
    description: str


def _signature(text: str) -> str:
    return f"\n```\n{text}\n```\n"


BUILTIN_FUNCTIONS: tuple[BuiltinFunction, ...] = (
    BuiltinFunction(
        "alloc", 1,
        _signature("fun alloc(locations: Integer) -> Address<Any>")
        + "Allocates a block of memory with `locations` locations. "
        "Returns the address of the first location.",
    ),
    BuiltinFunction(
        "button", 2,
        _signature("fun button(label: String, onClick: Function) -> Button")
        + "Creates a button on the HTML page with the given `label`. When the button is "
        "pushed, the function `onClick` is called. An identifier is returned that can be "
        "passed to `buttonlabel()` to identify the button.",
    ),
    BuiltinFunction(
        "buttonlabel", 2,
        _signature("fun buttonlabel(button: Button, label: String) -> void")
        + "Sets the label on the button identified by `button` to `label`. "
        "The value of `button` can be obtained from `button()`.",
    ),
    BuiltinFunction(
        "free", 1,
        _signature("fun free(address: Address<Any>) -> void")
        + "Returns the previously allocated memory block to the free list. `address` "
        "refers to the memory address returned by a call to `alloc()`.",
    ),
    BuiltinFunction(
        "html", 1,
        _signature("fun html(code: HTMLCode) -> void")
        + "Sends `code` as an HTML code to the HTML window.",
    ),
    BuiltinFunction(
        "i2s", 2,
        _signature("fun i2s(address: Address<String>, number: Integer) -> void")
        + "Converts the integer `number` to a string, and stores it in the memory "
        "location specified by `address`.",
    ),
    BuiltinFunction(
        "iprint", 1,
        _signature("fun iprint(number: Integer) -> void")
        + "Prints an integer to the console. This will not print a new line by default.",
    ),
    BuiltinFunction(
        "iread", 1,
        _signature("fun iread(prompt: String) -> Integer")
        + "Prompts the user to enter an integer with the message `prompt`.",
    ),
    BuiltinFunction(
        "makeimg", 0,
        _signature("fun makeimg() -> Image")
        + "Creates an image with no source and returns a reference to the image.",
    ),
    BuiltinFunction(
        "makelabel", 1,
        _signature("fun makelabel(text: String) -> Label")
        + "Creates a label setting its contents to `text` and returns an integer label "
        "identifier that can be passed to `setlabel()`.",
    ),
    BuiltinFunction(
        "maketable", 3,
        _signature("fun maketable(rows: Integer, columns: Integer, onClick: Function) -> Table")
        + "Creates a table with `rows` rows and `columns` columns and returns an integer "
        "identifying the table. The function `onClick` is called each time the user clicks "
        "on the table. `onClick` receives the row and column clicked as arguments.",
    ),
    BuiltinFunction(
        "random", 1,
        _signature("fun random(max: Integer) -> Integer")
        + "Returns a random number between 0 and `max`, including 0 but not `max`.",
    ),
    BuiltinFunction(
        "setcell", 4,
        _signature("fun setcell(table: Table, row: Integer, column: Integer, text: String) -> void")
        + "Sets the contents of the cell at row `row` and column `column` in table `table` "
        "to the string `text`. The value of `table` can be obtained from `maketable()`.",
    ),
    BuiltinFunction(
        "setcellcolor", 4,
        _signature("fun setcellcolor(table: Table, row: Integer, column: Integer, color: String) -> void")
        + "Sets the background color of the cell at row `row` and column `column` in the "
        "table `table` to `color`. The value of `table` can be obtained from `maketable()`.",
    ),
    BuiltinFunction(
        "setimg", 2,
        _signature("fun setimg(image: Image, src: String) -> void")
        + "Sets the source of an image. The value of `image` can be obtained from a call "
        "to `makeimg()`.",
    ),
    BuiltinFunction(
        "setlabel", 2,
        _signature("fun setlabel(label: Label, text: String) -> void")
        + "Sets the text in `label` to `text`. The value of `label` can be obtained from a "
        "call to `makelabel()`.",
    ),
    BuiltinFunction(
        "sprint", 1,
        _signature("fun sprint(text: String) -> void")
        + "Prints the string `text` to the console. This will not print a new line by default.",
    ),
    BuiltinFunction(
        "sread", 2,
        _signature("fun sread(address: Address<String>, prompt: String) -> void")
        + "Prompts the user to enter a string with the message `prompt` and stores the "
        "result in `address`.",
    ),
    BuiltinFunction(
        "stoptimer", 1,
        _signature("fun stoptimer(timer: Timer) -> void")
        + "Stops the given timer. A reference to the timer can be obtained from `timer()`.",
    ),
    BuiltinFunction(
        "timer", 2,
        _signature("fun timer(milliseconds: Integer, function: Function) -> Timer")
        + "Sets a timer. The function `function` will be called after `milliseconds` "
        "milliseconds have passed. Returns an identifier of this timer that can be used "
        "in `stoptimer()`.",
    ),
    BuiltinFunction(
        "init", 0,
        _signature("fun init() -> void")
        + "The main function for the program. This is the function that will be called "
        "when the program is run.",
    ),
)

KEYWORD_DESCRIPTIONS: dict[str, str] = {
    "else": _signature('else "{" "\\n" <stmt-list> "}" "\\n" |\nelse <if-stmt>')
    + "A list of statements to be executed if the preceding if statement's condition is false.",
    "fun": _signature("fun <name: Identifier>") + "Defines a function with the name `name`",
    "var": _signature("var <name: Identifier>") + "Defines a variable with the name `name`",
}

# Entry point name; may always be declared by a program.
ENTRY_POINT = "init"


def find_builtin(name: str) -> Optional[BuiltinFunction]:
    """Return the built-in called ``name``, if any."""
    for func in BUILTIN_FUNCTIONS:
        if func.name == name:
            return func
    return None


def describe(word: str) -> Optional[str]:
    """Return hover documentation for a built-in function or keyword."""
    func = find_builtin(word)
    if func is not None:
        return func.description
    return KEYWORD_DESCRIPTIONS.get(word)
