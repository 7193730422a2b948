"""
Stable Fluids Solver
====================
The numerical core of the fluid simulation.

Why is this package needed?
---------------------------
1. Physics: It implements diffusion, pressure projection and semi-Lagrangian
   advection on a square grid.
2. Boundaries: It keeps the container walls and the obstacles impermeable.
3. Forcing: It injects coherent noise and animates the obstacle set.

Note: This package is pure NumPy/Numba and knows nothing about threads or images.
"""
