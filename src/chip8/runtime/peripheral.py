import sys
import queue
import logging as lg
import threading as th

from chip8.runtime.events import ToneRequest


class Peripheral(th.Thread):
    def __init__(self):
        super().__init__(daemon=True)
        self.stop_event = th.Event()

    def stop(self):
        self.stop_event.set()


class Speaker(Peripheral):
    ''' Plays tone requests one after another, never blocking the machine '''

    def __init__(self, bell: bool = False):
        super().__init__()
        self.requests: queue.Queue[ToneRequest | None] = queue.Queue()
        self.bell = bell        # Ring the terminal bell for each tone
        self.played = 0

    def play(self, request: ToneRequest):
        self.requests.put(request)

    def stop(self):
        super().stop()
        self.requests.put(None)

    def run(self):
        while True:
            request = self.requests.get()

            try:
                if request is None:
                    break

                self.sound(request)
            finally:
                self.requests.task_done()

        lg.debug('Speaker stop')

    def sound(self, request: ToneRequest):
        lg.info(f'Tone for {request.duration_ms} ms')

        if self.bell:
            sys.stdout.write('\a')
            sys.stdout.flush()

        self.stop_event.wait(request.duration_ms / 1000)
        self.played += 1


def start_pp(pp: list[Peripheral]):
    for p in pp:
        p.start()


def stop_pp(pp: list[Peripheral]):
    for p in pp:
        p.stop()
        p.join()
