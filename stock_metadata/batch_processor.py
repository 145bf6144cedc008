"""
Batch metadata generation over the loaded file list.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from .config import AppConfig
from .logging_setup import get_logger
from .metadata_service import MetadataService
from .models import (
    BatchProgress,
    BatchState,
    FileItem,
    FileStatus,
    Metadata,
    MetadataResult,
    RawMetadata,
)
from .scorer import calculate_score
from .utils import generate_id, get_file_name

logger = get_logger(__name__)

ProgressCallback = Callable[[BatchProgress, FileItem], None]


@dataclass
class ProcessingStats:
    """Class to track processing statistics."""
    total_images: int = 0
    processed_images: int = 0
    successful_images: int = 0
    failed_images: int = 0
    start_time: float = 0
    total_time: float = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        result = {k: v for k, v in self.__dict__.items()}
        if self.total_images > 0:
            result['success_rate'] = self.successful_images / self.total_images
        if self.processed_images > 0:
            result['avg_time_per_image'] = self.total_time / self.processed_images
        else:
            result['avg_time_per_image'] = 0
        return result


def has_existing_metadata(raw: Optional[RawMetadata]) -> bool:
    """Whether a file already carries stock metadata."""
    if raw is None or raw.tag_count <= 0:
        return False
    stock = raw.stock
    return bool(stock.title or stock.description or stock.keywords)


class BatchProcessor:
    """
    Owner of the file list and of batch runs over it.

    Files are generated one at a time in list order, with a fixed pause
    between requests. A failure is recorded on its file and never stops the
    run. ``stop`` is cooperative: the file being processed finishes, no
    further file is started.
    """

    def __init__(self, service: MetadataService, config: AppConfig,
                 on_progress: Optional[ProgressCallback] = None):
        """
        Initialize the batch processor.

        Args:
            service: Collaborator facade used for every file operation
            config: Application configuration
            on_progress: Called after each file of a batch run
        """
        self.service = service
        self.config = config
        self.request_interval = config.request_interval_ms / 1000
        self.preview_concurrency = max(1, config.preview_concurrency)
        self.on_progress = on_progress

        self.files: List[FileItem] = []
        self.selected_file_id: Optional[str] = None

        self.state = BatchState.IDLE
        self.progress = BatchProgress()
        self.stats = ProcessingStats()
        self._stop_requested = False
        self._run_active = False

    @property
    def is_processing(self) -> bool:
        return self.state == BatchState.RUNNING

    # File list

    def add_files(self, file_paths: Iterable[str]) -> List[FileItem]:
        """
        Add files as pending items.

        Previews are not loaded here; await ``load_all_previews`` afterwards.
        """
        new_files = [
            FileItem(id=generate_id(), file_path=path, file_name=get_file_name(path))
            for path in file_paths
        ]
        self.files.extend(new_files)
        if self.selected_file_id is None and new_files:
            self.selected_file_id = new_files[0].id
        logger.info(f"Added {len(new_files)} files ({len(self.files)} total)")
        return new_files

    def remove_file(self, file_id: str) -> None:
        self.files = [f for f in self.files if f.id != file_id]
        if self.selected_file_id == file_id:
            self.selected_file_id = self.files[0].id if self.files else None

    def clear_all(self) -> None:
        """Remove every file. A running batch is asked to stop."""
        self._stop_requested = True
        self.files = []
        self.selected_file_id = None
        self.state = BatchState.IDLE
        self.progress = BatchProgress()
        logger.info("File list cleared")

    def select_file(self, file_id: Optional[str]) -> None:
        self.selected_file_id = file_id

    def get_file(self, file_id: str) -> Optional[FileItem]:
        for item in self.files:
            if item.id == file_id:
                return item
        return None

    def get_selected_file(self) -> Optional[FileItem]:
        if self.selected_file_id is None:
            return None
        return self.get_file(self.selected_file_id)

    def get_pending_files(self) -> List[FileItem]:
        return [f for f in self.files if f.status == FileStatus.PENDING]

    def update_file_status(self, file_id: str, status: FileStatus, error: Optional[str] = None) -> None:
        item = self.get_file(file_id)
        if item is not None:
            item.status = status
            item.error = error

    def update_file_metadata(self, file_id: str, metadata: MetadataResult) -> None:
        item = self.get_file(file_id)
        if item is not None:
            item.metadata = metadata
            item.status = FileStatus.DONE
            item.error = None

    def update_file_preview(self, file_id: str, preview: str) -> None:
        item = self.get_file(file_id)
        if item is not None:
            item.preview = preview

    def update_existing_metadata(self, file_id: str, raw: RawMetadata) -> None:
        item = self.get_file(file_id)
        if item is not None:
            item.existing_metadata = raw
            item.has_existing_metadata = has_existing_metadata(raw)

    def increment_retry(self, file_id: str) -> None:
        item = self.get_file(file_id)
        if item is not None:
            item.retry_count += 1

    # Preview loading

    async def _load_file_info(self, item: FileItem) -> None:
        try:
            item.preview = await self.service.read_preview(item.file_path)
        except Exception as e:
            logger.error(f"Failed to load preview for {item.file_name}: {str(e)}")

        try:
            raw = await self.service.read_existing_metadata(item.file_path)
            item.existing_metadata = raw
            item.has_existing_metadata = has_existing_metadata(raw)
        except Exception as e:
            logger.error(f"Failed to read metadata of {item.file_name}: {str(e)}")

    async def load_all_previews(self) -> None:
        """
        Load previews and existing metadata for files without a preview.

        Files are handled in groups of ``preview_concurrency``; each group
        runs concurrently and completes before the next starts.
        """
        files = [f for f in self.files if not f.preview]
        if not files:
            return

        for i in range(0, len(files), self.preview_concurrency):
            chunk = files[i:i + self.preview_concurrency]
            await asyncio.gather(*(self._load_file_info(item) for item in chunk))

        logger.info(f"Loaded previews for {len(files)} files")

    # Generation

    async def _process_file(self, item: FileItem) -> bool:
        """
        Generate metadata for one file and record the outcome on it.

        Returns:
            True on success
        """
        item.status = FileStatus.PROCESSING
        item.error = None
        start_time = time.time()

        try:
            result = await self.service.generate_for_file(item.file_path)
        except Exception as e:
            item.status = FileStatus.ERROR
            item.error = str(e) or "Generation failed"
            logger.error(f"Error processing {item.file_name}: {item.error}")
            if self.config.debug_mode:
                import traceback
                logger.error(f"Traceback: {traceback.format_exc()}")
            return False

        item.metadata = result
        item.status = FileStatus.DONE
        logger.info(
            f"Successfully processed {item.file_name} "
            f"(score {result.score}, {time.time() - start_time:.1f}s)"
        )
        return True

    async def generate_file(self, file_id: str) -> Optional[FileItem]:
        """
        Generate metadata for a single file outside a batch run.

        Re-triggering a failed file counts as a retry.
        """
        item = self.get_file(file_id)
        if item is None:
            logger.warning(f"Unknown file id: {file_id}")
            return None

        if item.status == FileStatus.ERROR:
            item.retry_count += 1
        await self._process_file(item)
        return item

    async def start(self, files: Optional[Iterable[FileItem]] = None) -> Dict[str, Any]:
        """
        Generate metadata for every pending file, in order.

        Does nothing when a run is already active or nothing is pending.

        Args:
            files: Files to consider, the whole file list if None

        Returns:
            Dictionary with processing statistics
        """
        if self._run_active:
            logger.warning("Batch processing already running")
            return self.stats.to_dict()

        candidates = self.files if files is None else list(files)
        pending = [f for f in candidates if f.status == FileStatus.PENDING]
        total = len(pending)
        if total == 0:
            logger.info("No pending files to process")
            return self.stats.to_dict()

        self._run_active = True
        self._stop_requested = False
        self.state = BatchState.RUNNING
        progress = BatchProgress(current=0, total=total)
        self.progress = progress
        self.stats = ProcessingStats(total_images=total, start_time=time.time())

        logger.info(f"Starting batch of {total} files")

        try:
            for item in pending:
                if self._stop_requested:
                    logger.info("Batch processing stopped by user")
                    break

                success = await self._process_file(item)

                self.stats.processed_images += 1
                if success:
                    self.stats.successful_images += 1
                else:
                    self.stats.failed_images += 1

                progress.current += 1
                self._log_progress_stats(progress)
                if self.on_progress:
                    self.on_progress(progress, item)

                if progress.current < total and not self._stop_requested:
                    await self._wait_between_requests()
        finally:
            self._run_active = False
            if self.state == BatchState.RUNNING:
                self.state = BatchState.COMPLETED
            self.stats.total_time = time.time() - self.stats.start_time

        self._log_detailed_stats()
        return self.stats.to_dict()

    async def _wait_between_requests(self) -> None:
        """Pace requests to the AI service."""
        await asyncio.sleep(self.request_interval)

    async def generate_all_metadata(self) -> Dict[str, Any]:
        """Run a batch over the whole file list."""
        return await self.start(self.files)

    def stop(self) -> None:
        """
        Ask the running batch to stop before its next file.

        Progress and results recorded so far are kept.
        """
        self._stop_requested = True
        if self.state == BatchState.RUNNING:
            self.state = BatchState.STOPPED
            logger.info(f"Stop requested at {self.progress.current}/{self.progress.total}")

    # Saving

    async def _refresh_existing_metadata(self, item: FileItem) -> None:
        try:
            raw = await self.service.read_existing_metadata(item.file_path)
        except Exception as e:
            logger.warning(f"Failed to refresh metadata of {item.file_name}: {str(e)}")
            return
        item.existing_metadata = raw
        item.has_existing_metadata = has_existing_metadata(raw)

    def _require_file(self, file_id: str) -> FileItem:
        item = self.get_file(file_id)
        if item is None:
            raise KeyError(f"Unknown file id: {file_id}")
        return item

    async def save_file(self, file_id: str, metadata: Metadata,
                        create_backup: Optional[bool] = None) -> MetadataResult:
        """
        Write edited metadata into a file and keep it as the file's result.

        Raises:
            KeyError: If the file id is unknown
            StockMetadataError: If the write fails
        """
        item = self._require_file(file_id)
        await self.service.write_metadata(item.file_path, metadata, create_backup)

        result = MetadataResult.from_metadata(metadata, calculate_score(metadata))
        item.metadata = result
        item.status = FileStatus.DONE
        item.error = None

        await self._refresh_existing_metadata(item)
        return result

    async def delete_file_tags(self, file_id: str, tag_names: Iterable[str],
                               create_backup: Optional[bool] = None) -> None:
        """Delete tags from a file and refresh its metadata snapshot."""
        item = self._require_file(file_id)
        await self.service.delete_metadata_tags(item.file_path, tag_names, create_backup)
        await self._refresh_existing_metadata(item)

    async def strip_file_metadata(self, file_id: str, create_backup: Optional[bool] = None) -> None:
        """Remove all metadata from a file and refresh its metadata snapshot."""
        item = self._require_file(file_id)
        await self.service.strip_all_metadata(item.file_path, create_backup)
        await self._refresh_existing_metadata(item)

    # Statistics

    def _log_progress_stats(self, progress: BatchProgress) -> None:
        elapsed = time.time() - self.stats.start_time
        avg_time_per_image = elapsed / progress.current if progress.current else 0
        estimated_remaining = avg_time_per_image * (progress.total - progress.current)

        logger.info(
            f"Progress: {progress.current}/{progress.total} "
            f"({progress.current / progress.total * 100:.1f}%), "
            f"est. remaining: {estimated_remaining:.1f}s"
        )

    def _log_detailed_stats(self) -> None:
        stats = self.stats
        success_rate = stats.successful_images / stats.total_images if stats.total_images > 0 else 0

        logger.info("=== Processing Statistics ===")
        logger.info(f"State: {self.state.value}")
        logger.info(f"Total files: {stats.total_images}")
        logger.info(f"Processed: {stats.processed_images}")
        logger.info(f"Successful: {stats.successful_images} ({success_rate:.1%})")
        logger.info(f"Failed: {stats.failed_images}")
        logger.info(f"Total time: {stats.total_time:.1f}s")
