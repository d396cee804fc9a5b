from typing import Optional

from openpyxl import Workbook

import constants
from model.compilador import compile_program, CompiledProgram
from model.compilador.ir import format_node
from model.procesador.executor import Executor
from model.procesador.memory import Memory


# -----------------------
# Funciones de acción
# -----------------------

class Computer:
    """
    Carga un programa fuente, lo compila a la representación intermedia
    y lo ejecuta completo o paso a paso.
    """

    def __init__(self, memory_size: int = constants.MEMORY_SIZE):
        self.memory = Memory(memory_size)
        self.program: Optional[CompiledProgram] = None
        self._executor: Optional[Executor] = None
        self._is_stepping = False

    def load_program(self, source_text: str) -> CompiledProgram:
        """
        Compila el texto fuente. Reinicia la memoria y cualquier
        ejecución en curso.
        """
        self.stop_stepping()
        self.program = compile_program(source_text, self.memory)
        return self.program

    def _require_program(self) -> CompiledProgram:
        if self.program is None:
            raise RuntimeError("No program loaded. Call load_program(source) first.")
        return self.program

    def execute_program(self) -> list:
        """
        Ejecuta el programa desde la raíz hasta que termina.
        :return: Lista de valores escritos por las instrucciones output.
        """
        self.stop_stepping()
        program = self._require_program()
        program.reset_memory()
        return Executor(program).run()

    def start_stepping(self) -> None:
        """Prepara la ejecución paso a paso desde la raíz del programa."""
        program = self._require_program()
        program.reset_memory()
        self._executor = Executor(program)
        self._is_stepping = True

    def step(self) -> tuple:
        """
        Execute exactly one instruction if stepping is active.
        :return: (instrucción formateada, terminó)
        """
        if not self._is_stepping:
            raise RuntimeError("Stepping not started. Call start_stepping() first.")
        handle = self._executor.step()
        formatted = None
        if handle is not None:
            node = self.program.arena[handle]
            formatted = format_node(node, self.program.allocator.names())
        halted = self._executor.halted
        if halted:
            self._is_stepping = False
        return formatted, halted

    def stop_stepping(self) -> None:
        self._is_stepping = False
        self._executor = None

    def is_stepping(self) -> bool:
        return bool(self._is_stepping)

    @property
    def output(self) -> list:
        """Salida acumulada por la ejecución paso a paso actual."""
        if self._executor is None:
            return []
        return list(self._executor.output)


# -----------------------
# Funciones de datos
# -----------------------

class Data:

    @staticmethod
    def format_memory_value(val: int, mode: str) -> str:
        """
        Convierte el contenido de una celda de memoria a texto.
        :param val: entero con signo de 64 bits
        :param mode: ["bin", "hex", "decimal"]
        """
        if mode == "bin":
            mask = (1 << constants.WORDS_SIZE_BITS) - 1
            return format(int(val) & mask, f'0{constants.WORDS_SIZE_BITS}b')
        elif mode == "hex":
            return hex(int(val))
        elif mode == "decimal":
            return str(int(val))
        else:
            raise ValueError(
                f"Modo inválido: '{mode}'. "
                f"Opciones válidas: {constants.VALID_MEMORY_MODES}")

    @staticmethod
    def save_memory_fast(program: CompiledProgram, path_csv: str = constants.MEMORY_SAVE_PATH_CSV,
                         mode: str = "decimal") -> None:
        """
        Guarda en un CSV las celdas asignadas (una por línea).
        """
        count = program.allocator.next_available
        with open(path_csv, "w", encoding="utf-8") as f:
            for val in program.memory.snapshot(count):
                f.write(Data.format_memory_value(val, mode) + '\n')

    @staticmethod
    def save_modified_memory(program: CompiledProgram, path_xlsx: str = constants.MEMORY_SAVE_PATH,
                             mode: str = "decimal") -> str:
        """
        Guarda la memoria modificada en un Excel, con el símbolo de cada celda.
        :return: ruta del archivo escrito
        """
        if not path_xlsx.endswith(".xlsx"):
            path_xlsx += ".xlsx"

        wb = Workbook()
        ws = wb.active
        ws.title = "Memoria Modificada"

        # Encabezados
        ws.append(["Dirección", "Símbolo", "Contenido"])

        names = program.allocator.names()
        for address in sorted(program.memory.memory_changed):
            content = Data.format_memory_value(program.memory.read(address), mode)
            ws.append([address, names.get(address, ""), content])

        wb.save(path_xlsx)
        return path_xlsx
