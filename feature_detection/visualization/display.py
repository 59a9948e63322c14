"""
Window / trackbar boundary.

Two interchangeable displays share one interface:

    show(window, image)            blocking, returns once the user dismisses it
    refresh(window, image)         non-blocking redraw of a live window
    create_trackbar(name, window, value, maximum, on_change)
    wait_event(events)             blocks until a queued event or a dismiss
    close_all()

OpenCVDisplay drives real HighGUI windows. HeadlessDisplay records what
would have been shown and can replay scripted trackbar moves; it backs the
--headless CLI flag and the tests.

Events are (kind, value) tuples placed on a queue.Queue.
"""

import queue

import cv2

THRESHOLD_CHANGED = "threshold"
DISMISSED = "dismiss"


class OpenCVDisplay:

    def __init__(self, poll_ms: int = 30):
        self.poll_ms = poll_ms
        self._live_windows = []

    def show(self, window: str, image):
        cv2.imshow(window, image)
        cv2.waitKey(0)

    def refresh(self, window: str, image):
        cv2.imshow(window, image)

    def create_trackbar(self, name: str, window: str, value: int, maximum: int, on_change):
        cv2.namedWindow(window, cv2.WINDOW_AUTOSIZE)
        cv2.createTrackbar(name, window, value, maximum, on_change)
        if window not in self._live_windows:
            self._live_windows.append(window)

    def _window_closed(self) -> bool:
        for window in self._live_windows:
            if cv2.getWindowProperty(window, cv2.WND_PROP_VISIBLE) < 1:
                return True
        return False

    def wait_event(self, events: queue.Queue):
        """
        Pumps the HighGUI loop until the trackbar callback has queued an
        event, a key is pressed or a live window is closed.
        Trackbar callbacks only run inside cv2.waitKey.
        """
        while True:
            try:
                return events.get_nowait()
            except queue.Empty:
                pass

            key = cv2.waitKey(self.poll_ms)
            dismissed = key != -1 or self._window_closed()

            if not events.empty():
                # a dismiss in the same poll goes behind the pending change
                if dismissed:
                    events.put((DISMISSED, None))
                return events.get_nowait()
            if dismissed:
                return (DISMISSED, None)

    def close_all(self):
        cv2.destroyAllWindows()
        self._live_windows = []


class HeadlessDisplay:
    """
    Records every window update instead of drawing it.

    trackbar_script: values fed, one per wait_event call, to the registered
    trackbar callbacks as if the user had moved the slider. Once the script
    runs out the session is dismissed.
    """

    def __init__(self, trackbar_script=()):
        self.shown = []
        self.trackbars = {}
        self.closed = False
        self._script = list(trackbar_script)

    def show(self, window: str, image):
        self.shown.append((window, image.copy()))

    def refresh(self, window: str, image):
        self.shown.append((window, image.copy()))

    def create_trackbar(self, name: str, window: str, value: int, maximum: int, on_change):
        self.trackbars[(window, name)] = {
            "value": value,
            "maximum": maximum,
            "on_change": on_change,
        }

    def wait_event(self, events: queue.Queue):
        if events.empty() and self._script:
            value = self._script.pop(0)
            for bar in self.trackbars.values():
                bar["value"] = min(max(int(value), 0), bar["maximum"])
                bar["on_change"](bar["value"])

        try:
            return events.get_nowait()
        except queue.Empty:
            return (DISMISSED, None)

    def close_all(self):
        self.closed = True

    # -------------------------------------------------------------
    #   Inspection helpers
    # -------------------------------------------------------------

    @property
    def window_names(self):
        return [w for w, _ in self.shown]

    def images_for(self, window: str):
        return [img for w, img in self.shown if w == window]
