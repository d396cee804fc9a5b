import constants
import numpy as np


class Memory:
    """
    Clase que representa la memoria de ejecución.
    Almacena un array plano de enteros con signo de 64 bits.
    Las variables y las constantes del programa ocupan una celda cada una.
    """

    def __init__(self, size: int = constants.MEMORY_SIZE):
        """
        Inicializa la memoria con un array de ceros.
        :param size: Número de celdas.
        """
        self.size = size
        self.array: np.ndarray = np.zeros(size, dtype=np.int64)
        # Direcciones de memoria que fueron escritas
        self.memory_changed: list[int] = []

    def set_up(self):
        """Vuelve a poner toda la memoria en cero."""
        self.array = np.zeros(self.size, dtype=np.int64)
        self.memory_changed = []

    def read(self, address: int) -> int:
        """
        Devuelve la palabra almacenada en una dirección.
        :param address: Dirección de memoria a leer.
        :return: Palabra almacenada en la dirección.
        """
        if not (0 <= address < self.size):
            raise ValueError(f"Dirección de memoria fuera de rango: {address}")
        return int(self.array[address])

    def write(self, address: int, value: int):
        """
        Escribe una palabra en una dirección de memoria.
        """
        if not (0 <= address < self.size):
            raise ValueError(f"Dirección de memoria fuera de rango: {address}")

        self.array[address] = np.int64(value)
        if address not in self.memory_changed:
            self.memory_changed.append(address)

    def snapshot(self, count: int) -> list[int]:
        """Copy of the first ``count`` cells as plain ints."""
        return [int(v) for v in self.array[:count]]
