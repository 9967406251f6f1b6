"""Basic example demonstrating core functionality.

This example scores a few synthetic frames for tampering and compares
consecutive frames for scene changes.
"""

import numpy as np

from camtamper import detect_sabotage, detect_scene_change


def main() -> None:
    """Run the basic example."""
    print("=" * 60)
    print("camtamper - Basic Example")
    print("=" * 60)

    rng = np.random.default_rng(0)
    frames = {
        "normal": rng.integers(0, 256, size=(240, 320), dtype=np.uint8),
        "covered": np.zeros((240, 320), dtype=np.uint8),
        "flash": np.full((240, 320), 250, dtype=np.uint8),
    }

    # Example 1: single-frame scores
    print("\n1. Single-frame scores:")
    for name, frame in frames.items():
        record = detect_sabotage(frame)
        print(
            f"   {name:<8} blur={record.blur_score:5.1f} "
            f"blackout={record.blackout_score:5.1f} "
            f"flash={record.flash_score:5.1f} smear={record.smear_score:5.1f}"
        )

    # Example 2: scene change between consecutive frames
    print("\n2. Scene change:")
    previous = None
    for name, frame in frames.items():
        record = detect_scene_change(frame, previous)
        print(f"   {name:<8} change={record.scene_change_score:5.1f}")
        previous = frame

    print("\n" + "=" * 60)
    print("Example completed!")
    print("=" * 60)


if __name__ == "__main__":
    main()
