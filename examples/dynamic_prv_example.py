"""Example: time modulated pressure management with a dynamic PRV

A reservoir feeds a district through a dynamic pressure reducing valve. During the day the
valve keeps the district at 40 m pressure, during the night (01:00 to 05:00) at 25 m, which
reduces leakage while demand is low.

    R1 (reservoir) --P1--> J1 --DPRV1--> J2 (district)

The network is created with WNTR and converted into a ``ValveNetwork``. The single valve is
solved by the ``SeriesValveSolver`` with a simple daily demand pattern.
"""

import io

import wntr

from pressure_management_core import ActuatorPositionRecorder, Settings, SimulationLoop
from pressure_management_core.integrations.wntr import build_network
from pressure_management_core.testing import SeriesValveSolver

wn = wntr.network.WaterNetworkModel()
wn.add_reservoir("R1", base_head=65.0)
wn.add_junction("J1", base_demand=0.0, elevation=0.0)
wn.add_junction("J2", base_demand=0.02, elevation=2.0)
wn.add_pipe("P1", "R1", "J1", length=50, diameter=0.3, roughness=120)
wn.add_valve("DPRV1", "J1", "J2", diameter=0.2, valve_type="PRV", initial_setting=40.0)

config = {"TM": {"day_pressure": 40, "night_pressure": 25, "night": [["01:00", "05:00"]]}}
network = build_network(wn, dynamic_valves={"DPRV1": config})

# the valve network does not model pipe P1, so J1 gets the reservoir's head
network.nodes.set_head(network.nodes.index_of("J1"), 65.0)

settings = Settings(hydraulic_timestep=60, open_gain=3e-7, close_gain=3e-7)
solver = SeriesValveSolver(
    "DPRV1",
    # night time demand is 40% of the day time demand
    demand=lambda time: 0.008 if 3600 < time % 86400 < 18000 else 0.02,
    duration=86400,
    timestep=settings.hydraulic_timestep,
)
output = io.StringIO()
recorder = ActuatorPositionRecorder(output)
SimulationLoop(network, solver, settings, recorder=recorder).run()

lines = output.getvalue().splitlines()
for line in lines[:: 60 * 60 // settings.hydraulic_timestep]:
    print(line)

district = network.nodes.index_of("J2")
final_pressure = network.nodes.pressure(district)
print(f"Pressure in the district at the end of the day: {final_pressure:.2f} m")
