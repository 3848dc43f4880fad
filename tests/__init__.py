"""
treecutter test suite
=====================

Test Modules
------------
- test_models.py: Pydantic models and settings
- test_context.py: configuration loading and answer coercion
- test_renderer.py: strict and lenient rendering
- test_generator.py: tree walking and materialization
- test_hooks.py: post-generation scripts
- test_source.py: local and remote template sources
- test_prompts.py: questionary prompting
- test_cli.py: command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Skip tests that spawn subprocesses
    pytest -m "not integration"

    # Run specific test class
    pytest tests/test_generator.py::TestGenerateFiles
"""
