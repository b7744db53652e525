"""Default turn pipelines."""

from importlib import resources
from pathlib import Path

from finlife.core.pipeline import Pipeline

SECTIONS = ("weekly", "monthly_close")


def create_default_pipelines() -> dict[str, Pipeline]:
    """
    Create the default ``weekly`` and ``monthly_close`` pipelines.

    Loads both sections from the packaged default_pipeline.yml.

    Returns
    -------
    dict[str, Pipeline]
        Pipelines keyed by section name.

    Notes
    -----
    Users can modify the returned pipelines with insert_after(), remove()
    and replace(), or point ``pipeline_path`` at their own YAML file.
    """
    traversable = resources.files("finlife") / "default_pipeline.yml"
    with resources.as_file(traversable) as yaml_fs_path:
        return load_pipelines(Path(yaml_fs_path))


def load_pipelines(yaml_path: str | Path) -> dict[str, Pipeline]:
    """Load every pipeline section from *yaml_path*."""
    return {section: Pipeline.from_yaml(yaml_path, section) for section in SECTIONS}
