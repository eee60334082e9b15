from sigcompare import compare_signals, configure_logging
from sigcompare.utils import demo_signal_sets
import matplotlib.pyplot as plt
import numpy as np


def main():
    configure_logging(level="DEBUG")

    mat1, mat2, mat3 = demo_signal_sets(n_samples=1000, period=100)
    t = np.arange(1, 1001)

    # Direct comparison of the signals in three matrices
    compare_signals([mat1, mat2, mat3])

    # Same comparison with labels, vertical lines and a title
    vlines = np.arange(100, 1000, 100)
    fig, subplot_handles = compare_signals(
        [mat1, mat2, mat3], t, ['Signal A', 'Signal B'], 'Time (s)', 'Demo Title',
        vlines=vlines, mat_labels=['mat1', 'mat2', 'mat3']
    )
    print(f"Created {len(subplot_handles)} subplots in figure '{fig.get_label()}'")

    plt.show()


if __name__ == "__main__":
    main()
