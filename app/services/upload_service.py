# app/services/upload_service.py
"""
Image storage for portfolio projects.

Files live under <UPLOAD_DIR>/projects and are served by the /uploads static
mount. Names are generated (project-<uuid hex><ext>) so uploads never collide
and deletions can be restricted to files this service created.
"""
import logging
import os
import re
import uuid
from typing import Any, Dict

import aiofiles
from fastapi import UploadFile

from ..core.config import Settings
from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

FILENAME_PATTERN = re.compile(r"^project-[0-9a-f]{32}(\.[A-Za-z0-9]{1,10})?$")
PUBLIC_PREFIX = "/uploads/projects"
CHUNK_SIZE = 64 * 1024


class UploadService:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.directory = settings.project_upload_dir

    @staticmethod
    def generate_filename(original_name: str | None) -> str:
        ext = os.path.splitext(original_name or "")[1].lower()
        if ext and not re.fullmatch(r"\.[a-z0-9]{1,10}", ext):
            ext = ""
        return f"project-{uuid.uuid4().hex}{ext}"

    async def _read_limited(self, file: UploadFile) -> bytes:
        """Read the upload, refusing anything above the size limit."""
        limit = self.settings.max_upload_bytes
        if file.size is not None and file.size > limit:
            raise ValidationError(self._too_large_message())
        chunks = []
        total = 0
        while True:
            chunk = await file.read(CHUNK_SIZE)
            if not chunk:
                break
            total += len(chunk)
            if total > limit:
                raise ValidationError(self._too_large_message())
            chunks.append(chunk)
        return b"".join(chunks)

    def _too_large_message(self) -> str:
        return f"Arquivo muito grande. Máximo: {self.settings.max_upload_bytes // (1024 * 1024)}MB"

    async def save_image(self, file: UploadFile | None) -> Dict[str, Any]:
        if file is None or not file.filename:
            raise ValidationError("Nenhum arquivo foi enviado")

        content_type = (file.content_type or "").lower()
        if not content_type.startswith("image/"):
            raise ValidationError("Apenas arquivos de imagem são permitidos!")

        content = await self._read_limited(file)
        if not content:
            raise ValidationError("Arquivo vazio")

        filename = self.generate_filename(file.filename)
        os.makedirs(self.directory, exist_ok=True)
        file_path = os.path.join(self.directory, filename)

        async with aiofiles.open(file_path, "wb") as out_file:
            await out_file.write(content)

        logger.info(f"Imagem salva: {file_path} ({len(content)} bytes)")
        return {
            "message": "Imagem enviada com sucesso",
            "imagePath": f"{PUBLIC_PREFIX}/{filename}",
            "filename": filename,
        }

    def delete_image(self, filename: str) -> None:
        if not FILENAME_PATTERN.fullmatch(filename):
            raise ValidationError("Nome de arquivo inválido")

        file_path = os.path.join(self.directory, filename)
        if not os.path.exists(file_path):
            raise NotFoundError("Arquivo não encontrado")

        os.remove(file_path)
        logger.info(f"Imagem removida: {file_path}")
