"""Random-variate generators."""
