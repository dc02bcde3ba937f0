"""Static catalogs: header trigger rules and built-in function descriptors.

Both catalogs are plain immutable data. A ``Catalog`` bundles them so the
detector, synthesizer, and assembler receive them explicitly.
"""

from __future__ import annotations

import textwrap
from collections.abc import Iterable, Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TypeRef:
    """A C++ type: optional namespace, bare name, const flag, & or * marker."""

    name: str
    namespace: str | None = None
    const: bool = False
    ref: str = ""


@dataclass(frozen=True, slots=True)
class Param:
    """A built-in function parameter with an optional default value literal."""

    name: str
    type: TypeRef
    default: str | None = None


@dataclass(frozen=True, slots=True)
class TemplateSpec:
    """Generic header of a built-in.

    Either ``typename`` (a single named type parameter) or ``raw`` (a
    template parameter list used verbatim, e.g. a parameter pack) is set.
    """

    typename: str | None = None
    raw: str | None = None


@dataclass(frozen=True, slots=True)
class FunctionDescriptor:
    """A built-in convenience function synthesized into the output on demand."""

    name: str
    returns: TypeRef
    params: tuple[Param, ...]
    body: str
    template: TemplateSpec | None = None
    doc: str = ""


@dataclass(frozen=True, slots=True)
class HeaderRule:
    """An #include target and the identifiers that require it."""

    directive: str
    triggers: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Catalog:
    """Immutable configuration consumed by the compile pipeline."""

    headers: tuple[HeaderRule, ...]
    builtins: tuple[FunctionDescriptor, ...]
    namespace: str = "c6"

    def builtin(self, name: str) -> FunctionDescriptor | None:
        """Look up a built-in by name."""
        for descriptor in self.builtins:
            if descriptor.name == name:
                return descriptor
        return None

    def with_headers(self, extra: Mapping[str, Iterable[str]]) -> Catalog:
        """Return a copy with *extra* header rules merged in.

        Triggers for an existing directive are appended to its rule; new
        directives are added after the built-in ones.
        """
        merged: dict[str, list[str]] = {r.directive: list(r.triggers) for r in self.headers}
        for directive, triggers in extra.items():
            names = merged.setdefault(directive, [])
            names.extend(t for t in triggers if t not in names)
        headers = tuple(HeaderRule(d, tuple(t)) for d, t in merged.items())
        return Catalog(headers, self.builtins, self.namespace)


def _make_headers() -> tuple[HeaderRule, ...]:
    rules: list[HeaderRule] = []

    def h(directive: str, *triggers: str) -> None:
        rules.append(HeaderRule(directive, triggers))

    # I/O
    h("<iostream>", "cout", "cin", "cerr", "ostream", "istream")
    h("<fstream>", "ifstream", "ofstream", "fstream")
    h("<sstream>", "istringstream", "ostringstream", "stringstream")

    # Containers
    h("<vector>", "vector")
    h("<list>", "list")
    h("<deque>", "deque")
    h("<set>", "set", "multiset")
    h("<map>", "map", "multimap")
    h("<unordered_set>", "unordered_set")
    h("<unordered_map>", "unordered_map")
    h("<array>", "array")
    h("<forward_list>", "forward_list")
    h("<stack>", "stack")
    h("<queue>", "queue", "priority_queue")

    # Algorithms and numerics
    h(
        "<algorithm>",
        "sort", "find", "copy", "accumulate", "for_each", "transform", "count", "min", "max",
    )
    h("<numeric>", "accumulate", "inner_product", "partial_sum", "adjacent_difference")
    h("<cmath>", "sqrt", "pow", "sin", "cos", "tan", "log", "exp", "ceil", "floor", "abs")

    # C library
    h("<cstdlib>", "malloc", "free", "rand", "srand", "atoi", "atof", "exit")
    h("<cstring>", "strlen", "strcpy", "strcat", "strcmp", "memset", "memcpy")
    h("<ctime>", "time", "localtime", "strftime", "difftime", "clock")
    h("<cstdio>", "printf", "scanf", "fopen", "fclose", "fprintf", "fscanf")

    # Concurrency
    h("<thread>", "thread", "this_thread")
    h("<mutex>", "mutex", "lock_guard", "unique_lock", "recursive_mutex")
    h("<condition_variable>", "condition_variable")
    h("<atomic>", "atomic", "atomic_flag", "atomic_int")

    # Utilities
    h("<functional>", "function", "bind", "packaged_task")
    h(
        "<memory>",
        "unique_ptr", "shared_ptr", "weak_ptr", "make_unique", "make_shared", "allocator",
    )
    h(
        "<type_traits>",
        "is_same", "enable_if", "decay", "is_base_of", "remove_pointer", "is_same_v",
    )
    h("<optional>", "optional")
    h("<variant>", "variant")
    h("<tuple>", "tuple", "get", "make_tuple")
    h("<any>", "any", "any_cast")
    h("<exception>", "exception", "bad_alloc", "bad_cast", "bad_typeid")
    h("<limits>", "numeric_limits")
    h("<iterator>", "iterator", "reverse_iterator", "ostream_iterator")
    h("<regex>", "regex", "smatch", "sregex_iterator", "regex_search", "regex_replace")
    h("<chrono>", "chrono")
    h(
        "<filesystem>",
        "path", "file_status", "directory_iterator", "recursive_directory_iterator",
    )
    h(
        "<iomanip>",
        "setprecision", "fixed", "scientific", "showpoint", "noshowpoint", "setw",
        "setfill", "left", "right", "internal", "hex", "dec", "oct", "showbase",
        "noshowbase", "showpos", "noshowpos",
    )
    h(
        "<random>",
        "minstd_rand", "mt19937", "mt19937_64", "ranlux24_base", "ranlux48_base",
        "default_random_engine", "random_device", "uniform_int_distribution",
        "uniform_real_distribution", "bernoulli_distribution", "binomial_distribution",
        "negative_binomial_distribution", "poisson_distribution", "normal_distribution",
        "lognormal_distribution", "exponential_distribution", "weibull_distribution",
        "gamma_distribution", "chi_squared_distribution", "cauchy_distribution",
        "student_t_distribution", "seed_seq", "shuffle", "generate",
    )
    h(
        "<stdexcept>",
        "invalid_argument", "out_of_range", "runtime_error", "length_error",
        "overflow_error", "logic_error", "domain_error", "range_error", "underflow_error",
    )
    h(
        "<string>",
        "string", "basic_string", "wstring", "u16string", "u32string", "getline",
        "string_view", "to_string", "stoi", "stol", "stoll", "stof", "stod", "stold",
        "strchr", "strrchr", "strstr", "compare", "swap",
    )

    return tuple(rules)


def _body(code: str) -> str:
    """Normalise a hand-written body to four-space indentation."""
    return textwrap.indent(textwrap.dedent(code).strip("\n"), "    ")


_STRING_REF = TypeRef("string", "std", const=True, ref="&")


def _make_builtins() -> tuple[FunctionDescriptor, ...]:
    defs: list[FunctionDescriptor] = []

    def d(
        name: str,
        returns: TypeRef,
        params: tuple[Param, ...],
        body: str,
        *,
        template: TemplateSpec | None = None,
        doc: str = "",
    ) -> None:
        defs.append(FunctionDescriptor(name, returns, params, _body(body), template, doc))

    d(
        "write_file",
        TypeRef("void"),
        (
            Param("path", _STRING_REF),
            Param("contents", _STRING_REF),
            Param("overwrite", TypeRef("bool", const=True), "true"),
        ),
        """
        if (overwrite) {
            std::ofstream outFile(path);
            if (!outFile) {
                throw std::runtime_error("Error opening file for writing.");
            };
            outFile << contents;
            outFile.close();
        } else {
            std::ofstream outFile(path, std::ios::app);
            if (!outFile) {
                throw std::runtime_error("Error opening file for writing.");
            };
            outFile << contents;
            outFile.close();
        };
        """,
        doc=(
            "Writes the contents to the file at the provided path. Overwrite is optional "
            "and determines whether to overwrite the file or append to it. If the file "
            "cannot be opened it throws a std::runtime_error."
        ),
    )
    d(
        "read_file",
        TypeRef("string", "std"),
        (Param("path", _STRING_REF),),
        r"""
        std::ifstream inFile(path);
        if (!inFile) {
            throw std::runtime_error("Error opening file for reading.");
        };
        std::string line, contents;
        while (std::getline(inFile, line)) {
            contents += line + "\n";
        };
        inFile.close();
        return contents;
        """,
        doc=(
            "Gets the contents of the file at the provided path and returns them. If "
            "there is no file at the provided path it throws a std::runtime_error."
        ),
    )
    d(
        "randint",
        TypeRef("int"),
        (Param("low", TypeRef("int", const=True)), Param("high", TypeRef("int", const=True))),
        """
        std::random_device rd;
        std::mt19937 gen(rd());
        std::uniform_int_distribution<> dis(low, high);
        return dis(gen);
        """,
        doc="Generates a random integer between low and high (inclusive) then returns it.",
    )
    d(
        "randfloat",
        TypeRef("float"),
        (
            Param("low", TypeRef("float", const=True)),
            Param("high", TypeRef("float", const=True)),
        ),
        """
        std::random_device rd;
        std::mt19937 gen(rd());
        std::uniform_real_distribution<float> distr(low, high);
        return distr(gen);
        """,
        doc="Generates a random float between low and high then returns it.",
    )
    d(
        "println",
        TypeRef("void"),
        (Param("text", TypeRef("Args...", const=True)),),
        """
        (std::cout << ... << text) << std::endl;
        """,
        template=TemplateSpec(raw="typename... Args"),
        doc=(
            "Prints the provided values to the console followed by a newline. Accepts "
            "std::string and any primitive type."
        ),
    )
    d(
        "input",
        TypeRef("string", "std"),
        (Param("text", TypeRef("T", const=True, ref="&")),),
        """
        std::cout << text;
        std::string data;
        std::getline(std::cin, data);
        return data;
        """,
        template=TemplateSpec(typename="T"),
        doc=(
            "Prints the provided text to the console and waits for user input, which is "
            "returned as a std::string."
        ),
    )
    d(
        "to_int",
        TypeRef("int"),
        (Param("value", _STRING_REF),),
        """
        try {
            return std::stoi(value);
        } catch (const std::invalid_argument& e) {
            throw std::runtime_error(std::string("Invalid argument: ") + e.what());
        } catch (const std::out_of_range& e) {
            throw std::runtime_error(std::string("Out of range: ") + e.what());
        };
        """,
        doc=(
            "Converts the std::string value to an int. Throws a std::runtime_error when "
            "the conversion fails."
        ),
    )
    d(
        "to_string",
        TypeRef("string", "std"),
        (Param("value", TypeRef("T", const=True)),),
        """
        if constexpr (std::is_same_v<T, bool>) {
            if (value) {
                return "true";
            } else {
                return "false";
            };
        };
        return std::to_string(value);
        """,
        template=TemplateSpec(typename="T"),
        doc="Converts any primitive type (int, float, double, long, bool, ...) to a string.",
    )

    return tuple(defs)


DEFAULT_CATALOG = Catalog(_make_headers(), _make_builtins())
