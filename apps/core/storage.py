# apps/core/storage.py

"""
Armazenamento do documento {users, boards, tasks}

Dois modos:
- arquivo: JSON em disco, sobrevive a reinícios do processo
- memoria: volátil, usado quando o disco não é gravável

Toda escrita passa por transacao(), que segura a exclusão mútua
durante o ciclo carregar -> alterar -> salvar.
"""

import json
import logging
import os
import tempfile
import threading
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

try:
    import fcntl
except ImportError:  # Windows
    fcntl = None

from .exceptions import ErroArmazenamento
from .models import Documento

logger = logging.getLogger(__name__)

MODO_ARQUIVO = 'arquivo'
MODO_MEMORIA = 'memoria'
MODOS_VALIDOS = (MODO_ARQUIVO, MODO_MEMORIA)

TIMEOUT_LOCK_PADRAO = 5.0
_INTERVALO_TENTATIVA_LOCK = 0.01


class DocumentStore(ABC):
    """
    Classe abstrata do armazenamento

    Subclasses implementam apenas _ler/_gravar; o controle de
    concorrência fica aqui.
    """

    modo = ''

    def __init__(self, timeout_lock: float = TIMEOUT_LOCK_PADRAO):
        self._timeout_lock = timeout_lock
        self._lock = threading.RLock()
        self._profundidade = 0

    # =================== INTERFACE PÚBLICA ===================

    def carregar(self) -> Documento:
        """Retorna o documento atual, sempre com as três coleções"""
        with self._exclusao():
            return self._ler()

    def salvar(self, documento: Documento) -> None:
        """Persiste o documento inteiro de uma vez"""
        with self._exclusao():
            self._gravar(documento)

    @contextmanager
    def transacao(self) -> Iterator[Documento]:
        """
        Escopo de leitura-alteração-escrita

        O documento entregue é salvo ao final do bloco. Se o bloco
        levantar exceção nada é gravado.
        """
        with self._exclusao():
            documento = self._ler()
            yield documento
            self._gravar(documento)

    def descrever(self) -> str:
        return self.modo

    # =================== MÉTODOS PRIVADOS ===================

    @abstractmethod
    def _ler(self) -> Documento:
        pass

    @abstractmethod
    def _gravar(self, documento: Documento) -> None:
        pass

    def _adquirir_externo(self, prazo: float) -> None:
        """Gancho para exclusão entre processos (só no modo arquivo)"""

    def _liberar_externo(self) -> None:
        pass

    @contextmanager
    def _exclusao(self):
        prazo = time.monotonic() + self._timeout_lock

        if not self._lock.acquire(timeout=self._timeout_lock):
            raise ErroArmazenamento("Timeout aguardando o lock do documento")

        try:
            if self._profundidade == 0:
                self._adquirir_externo(prazo)
            self._profundidade += 1
            try:
                yield
            finally:
                self._profundidade -= 1
                if self._profundidade == 0:
                    self._liberar_externo()
        finally:
            self._lock.release()


class MemoryDocumentStore(DocumentStore):
    """Documento guardado no próprio processo; some quando ele reinicia"""

    modo = MODO_MEMORIA

    def __init__(self, timeout_lock: float = TIMEOUT_LOCK_PADRAO):
        super().__init__(timeout_lock)
        self._dados = Documento().para_dict()

    def _ler(self) -> Documento:
        # de_dict monta objetos novos, o estado guardado nunca é compartilhado
        return Documento.de_dict(self._dados)

    def _gravar(self, documento: Documento) -> None:
        self._dados = documento.para_dict()
        logger.debug("Documento salvo em memória: %s", documento.contagens())


class JsonFileDocumentStore(DocumentStore):
    """
    Documento em um arquivo JSON

    Escrita atômica (arquivo temporário + os.replace) e lock em um
    arquivo irmão ".lock" para coordenar processos diferentes.
    """

    modo = MODO_ARQUIVO

    def __init__(self, caminho, timeout_lock: float = TIMEOUT_LOCK_PADRAO):
        super().__init__(timeout_lock)
        self.caminho = Path(caminho)
        self.caminho_lock = self.caminho.with_name(self.caminho.name + '.lock')
        self._fd_lock: Optional[int] = None

    def descrever(self) -> str:
        return f"{self.modo}:{self.caminho}"

    def _ler(self) -> Documento:
        if not self.caminho.exists():
            return Documento()

        try:
            bruto = self.caminho.read_text(encoding='utf-8')
        except OSError as exc:
            logger.error("Falha lendo %s: %s", self.caminho, exc)
            raise ErroArmazenamento(f"Falha lendo {self.caminho}") from exc

        if not bruto.strip():
            return Documento()

        try:
            dados = json.loads(bruto)
        except ValueError as exc:
            logger.error("Documento corrompido em %s: %s", self.caminho, exc)
            raise ErroArmazenamento(f"Documento corrompido em {self.caminho}") from exc

        return Documento.de_dict(dados)

    def _gravar(self, documento: Documento) -> None:
        caminho_tmp = None
        try:
            self.caminho.parent.mkdir(parents=True, exist_ok=True)
            fd_tmp, caminho_tmp = tempfile.mkstemp(
                dir=self.caminho.parent, prefix=self.caminho.name, suffix='.tmp'
            )
            with os.fdopen(fd_tmp, 'w', encoding='utf-8') as arquivo:
                json.dump(documento.para_dict(), arquivo, indent=2, ensure_ascii=False)
                arquivo.write('\n')
                arquivo.flush()
                os.fsync(arquivo.fileno())
            os.replace(caminho_tmp, self.caminho)
            caminho_tmp = None
        except OSError as exc:
            logger.error("Falha gravando %s: %s", self.caminho, exc)
            raise ErroArmazenamento(f"Falha gravando {self.caminho}") from exc
        finally:
            if caminho_tmp is not None:
                try:
                    os.unlink(caminho_tmp)
                except OSError:
                    logger.warning("Arquivo temporário não removido: %s", caminho_tmp)

        logger.debug("Documento salvo em %s: %s", self.caminho, documento.contagens())

    def _adquirir_externo(self, prazo: float) -> None:
        if fcntl is None:
            return

        try:
            self.caminho_lock.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.caminho_lock, os.O_RDWR | os.O_CREAT, 0o644)
        except OSError as exc:
            raise ErroArmazenamento(f"Falha abrindo {self.caminho_lock}") from exc

        while True:
            try:
                fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
                break
            except BlockingIOError:
                if time.monotonic() >= prazo:
                    os.close(fd)
                    raise ErroArmazenamento("Timeout aguardando o lock do documento")
                time.sleep(_INTERVALO_TENTATIVA_LOCK)
            except OSError as exc:
                os.close(fd)
                raise ErroArmazenamento(f"Falha no lock de {self.caminho_lock}") from exc

        self._fd_lock = fd

    def _liberar_externo(self) -> None:
        if self._fd_lock is None:
            return
        try:
            fcntl.flock(self._fd_lock, fcntl.LOCK_UN)
        finally:
            os.close(self._fd_lock)
            self._fd_lock = None


def _diretorio_gravavel(diretorio: Path) -> bool:
    try:
        diretorio.mkdir(parents=True, exist_ok=True)
    except OSError:
        return False
    return os.access(diretorio, os.W_OK)


def construir_store(modo: str, caminho=None, timeout_lock: float = TIMEOUT_LOCK_PADRAO) -> DocumentStore:
    """
    Cria o store configurado

    No modo arquivo, se o diretório do documento não for gravável
    (deploy em sistema de arquivos somente leitura) cai para memória.
    """
    if modo not in MODOS_VALIDOS:
        raise ValueError(f"Modo de armazenamento inválido: {modo!r} (use {', '.join(MODOS_VALIDOS)})")

    if modo == MODO_MEMORIA:
        logger.info("Usando armazenamento em memória")
        return MemoryDocumentStore(timeout_lock)

    if caminho is None:
        raise ValueError("Modo arquivo exige o caminho do documento")

    caminho = Path(caminho)
    if not _diretorio_gravavel(caminho.parent):
        logger.warning(
            "Diretório %s não é gravável, usando armazenamento em memória", caminho.parent
        )
        return MemoryDocumentStore(timeout_lock)

    logger.info("Usando armazenamento em arquivo: %s", caminho)
    return JsonFileDocumentStore(caminho, timeout_lock)
