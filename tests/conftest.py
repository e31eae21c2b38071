"""
Test configuration and fixtures for the appflow test suite.
"""
import sys
import pytest
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from appflow.parser import parse


@pytest.fixture
def sample_flow() -> str:
    """Return a small program touching every statement form."""
    return """
    import fetch : Request -> Response ;
    import Settings : Config ;
    ;
    route : Request -> Response = fetch -> {
        200 : decode -> store ( table = orders , retries = 3 ) ,
        Redirect ( 301 , location ) : fetch ,
        other : fail
    } ;
    export main = route -> log ;
    """


@pytest.fixture
def parser_func():
    """Return the parse function."""
    return parse
