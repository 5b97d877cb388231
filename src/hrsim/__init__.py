"""
hrsim: Real-time Hindmarsh–Rose neuron simulator

Simulates the three-variable Hindmarsh–Rose model on every tick of a
real-time host and exposes the membrane potential as an output signal.

Core concepts:
- The host fixes the tick period
- An explicit six-stage Runge–Kutta step needs a small step size to stay stable
- A step-size table lists how many points one burst takes at each step size
- The negotiator picks a step size and an integer number of sub-steps per
  tick so that bursts span the requested burst duration in real time
"""

__version__ = "0.1.0"
