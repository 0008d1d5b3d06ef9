"""Basic tests to verify project setup."""


def test_imports():
    """Test that main modules can be imported."""
    import smarttodo
    import smarttodo.cli.main

    assert smarttodo.__version__ == "0.1.0"
    assert smarttodo.cli.main.app is not None
