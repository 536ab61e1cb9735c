import matplotlib

# No display when running the test suite
matplotlib.use("Agg")
