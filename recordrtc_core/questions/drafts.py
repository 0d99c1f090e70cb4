"""
Черновые области файлов (draft areas) для полей-редакторов.

Файлы, встроенные в форматированный текст (текст вопроса, отзывы), хранятся в
постоянной области  files/<contextid>/<component>/<filearea>/<itemid>/ , а в
тексте на них ссылается маркер @@PLUGINFILE@@/.
Пока форма открыта, файлы копируются во временную область пользователя
 draft/<user_id>/<draftitemid>/ , и ссылки в тексте указывают на неё.
При сохранении выполняется обратная операция. Чужие черновики недоступны:
сервис видит только область своего пользователя.
"""

from typing import Any, List, Mapping, Optional
import random

from django.core.files.base import ContentFile
from django.core.files.storage import Storage, default_storage

from recordrtc_core.setup_logger import setup_logger
from .exceptions import DraftAreaError

drafts_logger = setup_logger(name=__file__, log_dir="logs/questions", log_file="drafts.log")

PLUGINFILE_MARKER = "@@PLUGINFILE@@/"
DEFAULT_FILE_OPTIONS = {"subdirs": False, "maxfiles": -1, "maxbytes": 0}


class DraftAreaService:
    """Подготовка и сохранение черновых областей пользователя поверх Django Storage"""

    MAX_DRAFT_ITEMID = 999999999

    def __init__(self, storage: Optional[Storage] = None, user=None):
        self.storage = storage or default_storage
        self.user = user

    @property
    def owner_id(self) -> int:
        """id владельца черновиков; 0 для анонимного пользователя"""
        if self.user is None or not getattr(self.user, "is_authenticated", False):
            return 0
        return self.user.pk

    # Пути и ссылки

    @staticmethod
    def area_path(contextid: int, component: str, filearea: str, itemid: Optional[int]) -> str:
        return f"files/{contextid}/{component}/{filearea}/{itemid or 0}/"

    def draft_path(self, draftitemid: int) -> str:
        return f"draft/{self.owner_id}/{draftitemid}/"

    def draft_url(self, draftitemid: int) -> str:
        return self.storage.url(self.draft_path(draftitemid))

    # Идентификаторы черновиков

    @staticmethod
    def get_submitted_draft_itemid(data: Optional[Mapping[str, Any]], elname: str) -> int:
        """item id черновика, пришедший с формой (поле <elname>_itemid), или 0"""
        if not data:
            return 0
        try:
            return max(int(data.get(f"{elname}_itemid") or 0), 0)
        except (TypeError, ValueError):
            return 0

    def get_unused_draft_itemid(self) -> int:
        while True:
            draftitemid = random.randint(1, self.MAX_DRAFT_ITEMID)
            if not self._list_files(self.draft_path(draftitemid)):
                return draftitemid

    # Основные операции

    def prepare_draft_area(self, draftitemid: int, contextid: int, component: str, filearea: str,
                           itemid: Optional[int], options: Optional[Mapping] = None,
                           text: Optional[str] = None) -> tuple:
        """
        Готовит черновую область для редактора.

        Если draftitemid == 0, создаётся новый черновик, и в него копируются
        файлы из постоянной области (если itemid задан).
        Уже существующий черновик (форма перерисовывается) не перезаписывается.

        Returns:
            (draftitemid, текст со ссылками на черновик)
        """
        if not draftitemid:
            draftitemid = self.get_unused_draft_itemid()
            if itemid is not None:
                self._copy_files(
                    self.area_path(contextid, component, filearea, itemid),
                    self.draft_path(draftitemid),
                    options,
                    draftitemid=draftitemid, filearea=filearea, itemid=itemid,
                )
            drafts_logger.debug(f"Prepared draft area {draftitemid} for {component}/{filearea}/{itemid}")

        if text is None:
            return draftitemid, None
        return draftitemid, text.replace(PLUGINFILE_MARKER, self.draft_url(draftitemid))

    def save_draft_area_files(self, draftitemid: int, contextid: int, component: str, filearea: str,
                              itemid: int, options: Optional[Mapping] = None,
                              text: Optional[str] = None) -> Optional[str]:
        """
        Переносит файлы черновика в постоянную область и возвращает текст
        со ссылками @@PLUGINFILE@@/.
        """
        if not draftitemid:
            return text

        target = self.area_path(contextid, component, filearea, itemid)
        self.delete_area_files(contextid, component, filearea, itemid)
        self._copy_files(self.draft_path(draftitemid), target, options,
                         draftitemid=draftitemid, filearea=filearea, itemid=itemid)
        drafts_logger.info(f"Saved draft area {draftitemid} of user {self.owner_id} into {target}")

        if text is None:
            return None
        return text.replace(self.draft_url(draftitemid), PLUGINFILE_MARKER)

    def add_draft_file(self, draftitemid: int, filename: str, content: bytes) -> str:
        """Кладёт загруженный файл в черновик; возвращает URL файла"""
        path = self.draft_path(draftitemid) + filename
        try:
            if self.storage.exists(path):
                self.storage.delete(path)
            self.storage.save(path, ContentFile(content))
        except OSError as e:
            raise DraftAreaError(f"Cannot store draft file {filename}: {e}", draftitemid=draftitemid) from e
        return self.storage.url(path)

    def delete_area_files(self, contextid: int, component: str, filearea: str, itemid: Optional[int]) -> None:
        base = self.area_path(contextid, component, filearea, itemid)
        for filename in self._list_files(base):
            try:
                self.storage.delete(base + filename)
            except OSError as e:
                raise DraftAreaError(f"Cannot delete {base}{filename}: {e}", filearea=filearea, itemid=itemid) from e

    # Внутреннее

    def _list_files(self, path: str) -> List[str]:
        try:
            _, files = self.storage.listdir(path)
        except FileNotFoundError:
            return []
        return sorted(files)

    def _copy_files(self, source: str, target: str, options: Optional[Mapping], **context) -> None:
        options = {**DEFAULT_FILE_OPTIONS, **(options or {})}
        files = self._list_files(source)
        if options["maxfiles"] >= 0:
            files = files[:options["maxfiles"]]

        for filename in files:
            try:
                with self.storage.open(source + filename, "rb") as f:
                    content = f.read()
                if options["maxbytes"] and len(content) > options["maxbytes"]:
                    drafts_logger.warning(f"Skipping {source}{filename}: larger than {options['maxbytes']} bytes")
                    continue
                if self.storage.exists(target + filename):
                    self.storage.delete(target + filename)
                self.storage.save(target + filename, ContentFile(content))
            except OSError as e:
                drafts_logger.error(f"Draft area copy failed {source}{filename} -> {target}: {e}")
                raise DraftAreaError(f"Cannot copy {source}{filename}: {e}", **context) from e
