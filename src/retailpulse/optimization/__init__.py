from retailpulse.optimization.confidence import (
    BootstrapEstimator, compute_confidence_intervals
)
from retailpulse.optimization.policy_simulator import PolicySimulator, simulate

__all__ = ['BootstrapEstimator', 'compute_confidence_intervals',
           'PolicySimulator', 'simulate']
