import numpy as np
from typing import List, Optional, Sequence, Tuple
from scipy import signal as sp_signal


def demo_signal_sets(n_samples: int = 1000, period: float = 100) -> List[np.ndarray]:
    """Three 2 x n_samples matrices: ramp/sine, reversed ramp/cosine, ones/zeros."""
    t = np.arange(1, n_samples + 1)
    mat1 = np.vstack([t, np.sin(2 * np.pi * t / period)])
    mat2 = np.vstack([t[::-1], np.cos(2 * np.pi * t / period)])
    mat3 = np.vstack([np.ones(n_samples), np.zeros(n_samples)])
    return [mat1, mat2, mat3]

def generate_pulse_train(n_samples: int, sampling_rate: float, pulse_rate: float, n_channels: int = 1,
                         amplitudes: Optional[Sequence[float]] = None, f_pulse: float = 2500,
                         sampling_rate_pulse: Optional[float] = None,
                         seed: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Generate decaying sine-burst pulses at a fixed rate.

    Each pulse is one period of a sine at `f_pulse` followed by a double exponential
    decay that starts after a random delay. Pulses are generated at
    `sampling_rate_pulse` and resampled to `sampling_rate`.

    Args:
        n_samples: Number of output samples per channel
        sampling_rate: Output sampling rate (Hz)
        pulse_rate: Pulses per second
        n_channels: Number of channels
        amplitudes: One scale factor per channel. Defaults to 1 for all channels.
        f_pulse: Frequency of the sine burst (Hz)
        sampling_rate_pulse: Generation rate (Hz). Defaults to 4 * f_pulse.
        seed: Seed for the random decay delays

    Returns:
        time: (n_samples,) time vector in seconds
        signals: (n_channels, n_samples) pulse signals
        onsets: (n_samples,) vector, 1 at the sample of every pulse onset and 0 elsewhere
    """
    if n_samples < 1 or n_channels < 1:
        raise ValueError("n_samples and n_channels must be at least 1.")
    if pulse_rate <= 0 or sampling_rate <= 0:
        raise ValueError("pulse_rate and sampling_rate must be positive.")
    if amplitudes is None:
        amplitudes = np.ones(n_channels)
    amplitudes = np.asarray(amplitudes, dtype=float)
    if amplitudes.shape != (n_channels,):
        raise ValueError(f"amplitudes must have one entry per channel ({n_channels}). Got shape: {amplitudes.shape}")
    if sampling_rate_pulse is None:
        sampling_rate_pulse = 4 * f_pulse

    rng = np.random.default_rng(seed)
    total_time = n_samples / sampling_rate
    time_pulse = np.arange(0, total_time, 1 / sampling_rate_pulse)

    pulse = np.zeros(len(time_pulse))
    start_times = np.arange(0, total_time, 1 / pulse_rate)
    for start_time in start_times:
        indices_sine = np.where((time_pulse >= start_time) & (time_pulse < start_time + 1 / f_pulse))
        rand_delay = rng.uniform(3/8 * (1/f_pulse), 7/8 * (1/f_pulse))
        indices_exp = np.where(time_pulse >= start_time + rand_delay)

        pulse[indices_sine] = -np.sin(2 * np.pi * f_pulse * time_pulse[indices_sine])
        pulse[indices_exp] += -np.exp(-3000 * (time_pulse[indices_exp] - start_time)) \
            - np.exp(-5000 * (time_pulse[indices_exp] - start_time))

    pulse = sp_signal.resample(pulse, int(len(pulse) * sampling_rate / sampling_rate_pulse))

    # Pad or truncate, resampling can be off by a sample
    if pulse.shape[0] > n_samples:
        pulse = pulse[:n_samples]
    elif pulse.shape[0] < n_samples:
        pulse = np.pad(pulse, (0, n_samples - pulse.shape[0]), 'constant')

    signals = amplitudes[:, np.newaxis] * pulse[np.newaxis, :]

    onsets = np.zeros(n_samples)
    onset_idx = np.round(start_times * sampling_rate).astype(int)
    onsets[np.unique(onset_idx[onset_idx < n_samples])] = 1

    time = np.arange(n_samples) / sampling_rate
    return time, signals, onsets
