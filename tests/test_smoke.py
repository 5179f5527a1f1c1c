"""
Smoke tests: the package imports, the version and the public API exist.
"""


def test_import_package():
    import shadcn_props
    assert shadcn_props.__version__ == "0.1.0"


def test_public_api():
    from shadcn_props import (
        __version__,
        errors,
        extract_component_props,
        load_config,
        normalize_component_name,
        run,
        run_strategy_chain,
        settings_from_config,
    )
    assert __version__ == "0.1.0"
    assert callable(extract_component_props)
    assert callable(run)
    assert callable(run_strategy_chain)
    assert callable(load_config)
    assert callable(settings_from_config)
    assert issubclass(errors.WriteFailure, errors.PropsExtractError)
    assert normalize_component_name("alert-dialog").type_name_prefix == "AlertDialog"


def test_extract_component_props_signature():
    """extract_component_props accepts (identity, files) and never returns an empty document."""
    from shadcn_props import extract_component_props, normalize_component_name

    result = extract_component_props(normalize_component_name("badge"), [])
    assert result.synthetic
    assert result.document.type_names == ["BadgeProps"]
    assert result.text.startswith('import * as React from "react";')
