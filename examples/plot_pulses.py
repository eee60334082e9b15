from sigcompare import plot_signals
from sigcompare.utils import generate_pulse_train
import matplotlib.pyplot as plt
import numpy as np

SAMPLING_RATE = 30000
PULSE_RATE = 200


def main():
    time, pulses, onsets = generate_pulse_train(
        n_samples=3000, sampling_rate=SAMPLING_RATE, pulse_rate=PULSE_RATE,
        n_channels=4, amplitudes=[1.0, 0.5, 0.25, 0.1], seed=0
    )
    print(f"Generated pulses with shape {pulses.shape}, {int(onsets.sum())} onsets")

    noisy = pulses + 0.02 * np.random.randn(*pulses.shape)

    # Pulse onsets marked in every channel, channel 4 as magnitude on a log axis
    plot_signals(
        np.vstack([noisy[:3], np.abs(noisy[3]) + 1e-3]), time, 'pulse', 'Time (s)', 'Pulse train',
        num_plot_cols=2, markers=onsets, logy=[3]
    )

    # Separate vertical lines for the first two channels only, columns filled first
    plot_signals(
        noisy, time, ['A', 'B', 'C', 'D'], 'Time (s)', 'Pulse train (vlines)',
        num_plot_cols=2, plot_by_rows=False, link_axes='xy',
        vlines=[time[onsets > 0][:3], time[onsets > 0][3:6], None, None],
        vline_labels=[['p1', 'p2', 'p3'], ['p4', 'p5', 'p6'], [], []]
    )

    plt.show()


if __name__ == "__main__":
    main()
