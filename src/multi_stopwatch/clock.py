import time
import threading
from abc import ABC, abstractmethod

class Clock(ABC):
    @abstractmethod
    def now(self) -> float:
        '''
        Seconds on a monotonic scale. Only differences are meaningful.
        '''
        raise NotImplementedError
    
    def since(self, instant: float) -> float:
        return self.now() - instant

class MonotonicClock(Clock):
    def now(self) -> float:
        return time.monotonic()

class ManualClock(Clock):
    '''
    Only moves when told to. Lets tests pin elapsed arithmetic 
    without sleeping.
    '''
    def __init__(self, start: float = 0.0) -> None:
        self.__now = start
        self.__lock = threading.Lock()
    
    def now(self) -> float:
        with self.__lock:
            return self.__now
    
    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError(f'A monotonic clock cannot go back {seconds} s.')
        with self.__lock:
            self.__now += seconds
            return self.__now
