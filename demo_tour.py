from orrery import Simulation
from orrery.render import show_scene, info_panel
from orrery.utils import FrameClock
import plotly.io as pio
import logging
pio.renderers.default = 'browser'
logging.basicConfig(level=logging.INFO)

# Built-in solar system, camera at the overview pose
sim = Simulation()

# Let the planets move for five simulated seconds
sim.run(frames=300, dt=1 / 60)

# Fly to Saturn and give the camera time to settle
sim.pick('Saturn')
with FrameClock() as clock:
    sim.run(frames=240, dt=1 / 60)
print(f"Camera settled in {clock.elapsed:.3f} seconds of wall time")

# Info panel for the locked body
print('\n'.join(info_panel(sim.selected_record, sim.catalog)))

# Positions of the whole system after the tour so far
print(sim.propagator.snapshot().head(10))

# Draw the scene from the smoothed camera
show_scene(sim, n_points=256)

# Escape back to the overview
sim.escape()
sim.run(frames=240, dt=1 / 60)
show_scene(sim, show_orbits=False)
