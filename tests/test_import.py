"""Basic import tests to verify package structure."""


def test_import_hrsim():
    """Verify main package imports."""
    import hrsim
    assert hrsim.__version__ == "0.1.0"


def test_import_core():
    """Verify core module structure exists."""
    from hrsim import core
    assert hasattr(core, "__doc__")
    assert hasattr(core, "HindmarshRoseNeuron")


def test_import_host():
    """Verify host adapter module structure exists."""
    from hrsim import host
    assert hasattr(host, "apply_config")


def test_import_analysis():
    """Verify analysis module structure exists."""
    from hrsim import analysis
    assert hasattr(analysis, "__doc__")


def test_import_viz():
    """Verify viz module structure exists."""
    from hrsim import viz
    assert hasattr(viz, "plot_membrane_potential")
