import matplotlib

# plots are written to files only; no display in test runs
matplotlib.use("Agg")
