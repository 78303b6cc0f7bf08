"""budykogrid monthly water balance package.

A gridded Budyko bucket model for long-term monthly water balance. Net
radiation and Priestley-Taylor potential evaporation drive a per-cell soil
water store that is spun up over repeated climatological years.
"""

from budykogrid.outputs import BudykoFluxes, GridOutput
from budykogrid.processes import bucket_step, net_radiation, potential_evaporation
from budykogrid.run import monthly_orbital_terms, potential_evaporation_climatology, run, step
from budykogrid.types import BucketState, GridInputs, SimulationConfig
from budykogrid.utils import GridHeader, cell_latitudes, read_grid, write_grid
from budykogrid.workflow import load_inputs, run_directory, write_outputs

__all__ = [
    "BucketState",
    "BudykoFluxes",
    "GridHeader",
    "GridInputs",
    "GridOutput",
    "SimulationConfig",
    "bucket_step",
    "cell_latitudes",
    "load_inputs",
    "monthly_orbital_terms",
    "net_radiation",
    "potential_evaporation",
    "potential_evaporation_climatology",
    "read_grid",
    "run",
    "run_directory",
    "step",
    "write_grid",
    "write_outputs",
]
