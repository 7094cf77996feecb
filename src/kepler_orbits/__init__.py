"""Two-body orbit visualisation: analytic propagation, display geometry and a pygame viewer."""
