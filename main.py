"""
HandNav - Touchless scroll, page and cursor control from a webcam

Entry point for the application.
"""
import argparse
import logging
import sys
from pathlib import Path

# What the original browser host did with each discrete action
ACTION_DESCRIPTIONS = {
    "scroll_up": "scroll by -400px",
    "scroll_down": "scroll by +400px",
    "prev_page": "history back",
    "next_page": "history forward",
    "trigger_capture": "capture screenshot",
}


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="HandNav - Gesture navigation from a webcam",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--camera",
        type=int,
        default=None,
        help="Camera device ID (overrides config)",
    )

    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Screen width in pixels for cursor output (overrides config)",
    )

    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Screen height in pixels for cursor output (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show camera preview with landmarks and gesture info",
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(argv)


def describe_event(event) -> str:
    if event.x is not None:
        return f"{event.type.value} ({event.x:.0f}, {event.y:.0f})"
    action = ACTION_DESCRIPTIONS.get(event.type.value, "")
    return f"{event.type.value} -> {action}" if action else event.type.value


def run_webcam_debug(config):
    """
    Run webcam in debug mode - shows camera feed with landmarks.
    Useful for tuning thresholds.
    """
    import cv2
    from src.gestures import FrameProcessor
    from src.webcam import HandTracker

    tracker = HandTracker(config)
    processor = FrameProcessor(config)

    print("Starting webcam debug mode...")
    print("Press 'q' to quit")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not start hand tracker")
        return 1

    try:
        while True:
            landmarks = tracker.get_landmarks()
            result = processor.process(landmarks)

            for event in result.events:
                if event.is_discrete:
                    print(f"[{tracker.frame_count:5d}] {describe_event(event)}")

            frame = tracker.get_frame_with_landmarks(landmarks)
            if frame is not None:
                cv2.putText(
                    frame, f"Gesture: {result.gesture.name}", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 1, (0, 255, 0), 2
                )

                info_lines = []
                if result.fingers is not None:
                    f = result.fingers
                    info_lines.append(
                        f"Up: I={int(f.index_up)} M={int(f.middle_up)} "
                        f"R={int(f.ring_up)} P={int(f.pinky_up)} Fist={int(f.is_fist)}"
                    )
                if result.cursor is not None:
                    info_lines.append(f"Cursor: ({result.cursor[0]:.0f}, {result.cursor[1]:.0f})")
                if result.hold_elapsed_ms > 0:
                    info_lines.append(f"Hold: {result.hold_elapsed_ms:.0f}ms")

                for i, line in enumerate(info_lines):
                    cv2.putText(
                        frame, line, (10, 60 + i * 25),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                    )

                cv2.imshow("HandNav Debug", frame)

            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    finally:
        processor.stop()
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_webcam_mode(config):
    """Run HandNav headless, printing actions as the worker emits them."""
    import signal
    import atexit
    from PyQt5.QtCore import QCoreApplication, QThread, Qt
    from src.webcam import WebcamWorker

    app = QCoreApplication(sys.argv)

    thread = QThread()
    worker = WebcamWorker(config)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        print("\nCleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    def handle_action(event):
        print(f"Action: {describe_event(event)}")

    def handle_error(msg):
        print(f"WORKER ERROR: {msg}")
        app.quit()

    # Queued connections keep handlers on the main thread
    thread.started.connect(worker.start_process)
    worker.action_triggered.connect(handle_action, Qt.QueuedConnection)
    worker.gesture_changed.connect(lambda g: print(f"Gesture: {g.name}"), Qt.QueuedConnection)
    worker.hand_lost.connect(lambda: print("Hand lost"), Qt.QueuedConnection)
    worker.error.connect(handle_error, Qt.QueuedConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from src.gestures import ConfigError, load_config
    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"ERROR: Invalid configuration: {e}")
        return 2

    # Apply CLI overrides
    if args.camera is not None:
        config.camera.device_id = args.camera
    if args.width is not None:
        config.cursor.screen_width = args.width
    if args.height is not None:
        config.cursor.screen_height = args.height
    if config.cursor.screen_width < 1 or config.cursor.screen_height < 1:
        print("ERROR: Screen size must be positive")
        return 2

    print("HandNav starting...")
    print(f"  Camera: {config.camera.device_id}")
    print(f"  Screen: {config.cursor.screen_width}x{config.cursor.screen_height}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_webcam_debug(config)
    return run_webcam_mode(config)


if __name__ == "__main__":
    sys.exit(main())
