"""Image classification services answering "is there a cat in this image"."""

import os
import random
from typing import Any, List, Optional, Tuple

import cv2
import numpy as np
from PIL import Image

from ..config.defaults import DEFAULT_PATHS
from ..exceptions import ImageServiceError
from ..logging_config import get_logger
from .interfaces import ImageServiceInterface

logger = get_logger("image_service")


class CatImageService(ImageServiceInterface):
    """Cat classifier using an OpenCV Haar cascade.

    Accepts a numpy array (RGB or grayscale), a PIL image or a path to an
    image file. Every raw detection is scored from 0 to 100 using its size
    and its distance from the frame centre; the image contains a cat when
    any detection reaches the requested threshold.
    """

    def __init__(self,
                 cascade_path: Optional[str] = None,
                 scale_factor: float = 1.1,
                 min_neighbors: int = 3,
                 min_size: Tuple[int, int] = (30, 30),
                 max_size: Tuple[int, int] = (300, 300)):
        self.cascade_path = cascade_path or os.path.join(
            cv2.data.haarcascades, DEFAULT_PATHS["cat_cascade_file"]
        )
        self.scale_factor = scale_factor
        self.min_neighbors = min_neighbors
        self.min_detection_size = min_size
        self.max_detection_size = max_size

        # Preprocessing parameters
        self.blur_kernel_size = 3
        self.contrast_alpha = 1.2
        self.brightness_beta = 10

        self.haar_cascade = self._load_cascade(self.cascade_path)

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        frame = self._to_grayscale(image)
        processed = self._preprocess_frame(frame)
        boxes = self._detect(processed)

        scores = [self.score_detection(box, frame.shape) for box in boxes]
        contains_cat = any(score >= confidence_threshold for score in scores)

        logger.debug(f"Classified image: {len(boxes)} candidate(s), "
                     f"best score {max(scores, default=0.0):.1f}, "
                     f"threshold {confidence_threshold}, cat={contains_cat}")
        return contains_cat

    def score_detection(self, box: Tuple[int, int, int, int],
                        frame_shape: Tuple[int, ...]) -> float:
        """Score a detection box from 0 to 100.

        Larger boxes closer to the centre of the frame score higher.
        """
        x, y, w, h = box
        frame_h, frame_w = frame_shape[:2]

        center_x = x + w // 2
        center_y = y + h // 2
        center_dist = ((center_x - frame_w // 2) ** 2 + (center_y - frame_h // 2) ** 2) ** 0.5
        max_dist = (frame_w ** 2 + frame_h ** 2) ** 0.5
        center_factor = 1.0 - (center_dist / max_dist) if max_dist else 0.0

        max_area = self.max_detection_size[0] * self.max_detection_size[1]
        size_factor = min(1.0, (w * h) / max_area)

        confidence = 0.6 + 0.2 * center_factor + 0.2 * size_factor
        return max(0.0, min(1.0, confidence)) * 100.0

    def _load_cascade(self, cascade_path: str) -> "cv2.CascadeClassifier":
        if not os.path.exists(cascade_path):
            raise ImageServiceError(f"Cascade file not found: {cascade_path}")

        cascade = cv2.CascadeClassifier(cascade_path)
        if cascade.empty():
            raise ImageServiceError(f"Failed to load cascade from {cascade_path}")

        logger.info(f"Loaded Haar cascade from {cascade_path}")
        return cascade

    def _to_grayscale(self, image: Any) -> np.ndarray:
        """Convert any supported image input to a uint8 grayscale array."""
        if isinstance(image, (str, os.PathLike)):
            frame = cv2.imread(os.fspath(image), cv2.IMREAD_GRAYSCALE)
            if frame is None:
                raise ImageServiceError(f"Could not read image: {image}")
            return frame

        if isinstance(image, Image.Image):
            image = np.asarray(image.convert("RGB"))

        if not isinstance(image, np.ndarray):
            raise ImageServiceError(f"Unsupported image type: {type(image).__name__}")

        if image.size == 0:
            raise ImageServiceError("Image is empty")

        frame = image if image.dtype == np.uint8 else np.clip(image, 0, 255).astype(np.uint8)

        if frame.ndim == 2:
            return frame
        if frame.ndim == 3 and frame.shape[2] == 3:
            return cv2.cvtColor(frame, cv2.COLOR_RGB2GRAY)
        if frame.ndim == 3 and frame.shape[2] == 4:
            return cv2.cvtColor(frame, cv2.COLOR_RGBA2GRAY)

        raise ImageServiceError(f"Unsupported image shape: {frame.shape}")

    def _preprocess_frame(self, frame: np.ndarray) -> np.ndarray:
        blurred = cv2.GaussianBlur(frame, (self.blur_kernel_size, self.blur_kernel_size), 0)
        enhanced = cv2.convertScaleAbs(blurred, alpha=self.contrast_alpha, beta=self.brightness_beta)
        return cv2.equalizeHist(enhanced)

    def _detect(self, frame: np.ndarray) -> List[Tuple[int, int, int, int]]:
        try:
            detections = self.haar_cascade.detectMultiScale(
                frame,
                scaleFactor=self.scale_factor,
                minNeighbors=self.min_neighbors,
                minSize=self.min_detection_size,
                maxSize=self.max_detection_size,
                flags=cv2.CASCADE_SCALE_IMAGE
            )
        except cv2.error as e:
            raise ImageServiceError(f"Haar cascade detection failed: {e}") from e

        return [(int(x), int(y), int(w), int(h)) for x, y, w, h in detections]


class FakeImageService(ImageServiceInterface):
    """Classifier that answers at random, for demos and tests."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        return self._random.random() < 0.5
