"""
Entry point for running the TileGrid server as a module.
This allows running the server with `python -m tilegrid_core`.
"""

import hydra
from omegaconf import DictConfig

from .server import run_server


@hydra.main(version_base=None, config_path="../../config", config_name="config")
def main(cfg: DictConfig) -> None:
    """Run the TileGrid server with Hydra configuration.

    Args:
        cfg: Configuration from Hydra
    """
    run_server(cfg)


if __name__ == "__main__":
    main()
