"""
Render one full sweep without a window and save the raster as a PNG.
"""

from __future__ import annotations
import matplotlib.pyplot as plt
from bifview import setup, Viewport

sched = setup("sine", viewport=Viewport(0.7, 1.0), width=800, height=500, record_points=True)
ticks = sched.run()

print(f"Ticks: {ticks}, columns painted: {sched.sink.fills}")
print(f"Distinct states recorded in the last sweep: {len(sched.sink.recorder)}")

plt.imsave("sine_bifurcation.png", sched.sink.surface.clip(0.0, 1.0))
print("Wrote sine_bifurcation.png")
