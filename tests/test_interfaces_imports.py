def test_can_import_all_protocols():
    # Import must succeed and expose the expected names
    import jsembed.core.interfaces as I

    assert hasattr(I, "EscaperProtocol")
    assert hasattr(I, "TemplateEngineProtocol")


def test_public_api_is_exported():
    import jsembed

    for name in jsembed.__all__:
        assert hasattr(jsembed, name), name
    assert isinstance(jsembed.__version__, str)
