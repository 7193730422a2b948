"""
The CONTROLLER layer runs the solver off the caller's thread.
It wires the simulation and the rendering stage together with channels and
hands the caller a receiver of finished frame numbers.
"""
