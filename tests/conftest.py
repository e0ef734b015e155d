import pytest
from rb_linter.engine import LinterEngine
from rb_tree_sitter import ASTWalker, RubyParser, RubyPatterns


@pytest.fixture(scope="session")
def parser():
    return RubyParser()


@pytest.fixture(scope="session")
def engine():
    return LinterEngine()


@pytest.fixture
def call_site(parser):
    """Parse a snippet and return the CallSite of the first call to `method`."""

    def _call_site(code: str, method: str = "gsub"):
        result = parser.parse_string(code)
        for node in ASTWalker.find_all_by_type(result.tree.root_node, "call"):
            call = RubyPatterns.call_site(node, result.source)
            if call is not None and call.method_name.rstrip("!") == method:
                return call, result.source
        raise AssertionError(f"no call to {method} in {code!r}")

    return _call_site
