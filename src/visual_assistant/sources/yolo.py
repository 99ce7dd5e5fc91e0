"""
Live source - camera frames through an Ultralytics YOLO model.

Requires the optional ``live`` dependencies (ultralytics, opencv-python,
torch). Box coordinates are taken in frame pixels, so the frame size is the
tracker's viewport.
"""

import logging
import time
from threading import Event

import cv2
import torch
from ultralytics import YOLO

from ..models import Detection, Rect
from ..utils.constants import CAMERA_RECONNECT_DELAY, MAX_CAMERA_RECONNECT_ATTEMPTS

logger = logging.getLogger(__name__)


def initialize_camera(camera_url: str) -> cv2.VideoCapture:
    """
    Initialize camera with retry logic.

    Args:
        camera_url: Camera URL or device path ("0" selects the first webcam)

    Returns:
        OpenCV VideoCapture object

    Raises:
        RuntimeError: If camera cannot be opened after retries
    """
    source = int(camera_url) if camera_url.isdigit() else camera_url

    for attempt in range(MAX_CAMERA_RECONNECT_ATTEMPTS + 1):
        logger.info(f"Connecting to camera: {camera_url} (attempt {attempt + 1})")
        cap = cv2.VideoCapture(source)

        if cap.isOpened():
            logger.info("Camera connected successfully")
            return cap

        if attempt < MAX_CAMERA_RECONNECT_ATTEMPTS:
            logger.warning(f"Failed to connect, retrying in {CAMERA_RECONNECT_DELAY}s...")
            time.sleep(CAMERA_RECONNECT_DELAY)

    raise RuntimeError(f"Cannot connect to camera: {camera_url}")


def initialize_model(model_file: str) -> YOLO:
    """Load YOLO model on GPU if available."""
    device = "cuda" if torch.cuda.is_available() else "cpu"
    model = YOLO(model_file)
    model.to(device)

    logger.info(f"Model initialized: {model_file}")
    logger.info(f"Device: {device}")
    if device == "cpu":
        logger.warning("Running on CPU - performance will be slow")

    return model


def detections_from_results(yolo_results, names: dict[int, str]) -> list[Detection]:
    """
    Convert Ultralytics results for one frame to detections.

    Args:
        yolo_results: Return value of model.predict for a single frame
        names: Model class id -> label mapping
    """
    boxes = yolo_results[0].boxes
    if boxes is None or len(boxes) == 0:
        return []

    xyxy = boxes.xyxy.cpu().tolist()
    classes = boxes.cls.int().cpu().tolist()
    confidences = boxes.conf.cpu().tolist()

    return [
        Detection(
            box=Rect.from_xyxy(x1, y1, x2, y2),
            label=names.get(class_id, str(class_id)),
            confidence=float(conf),
        )
        for (x1, y1, x2, y2), class_id, conf in zip(xyxy, classes, confidences)
    ]


def run_live(
    runner,
    camera_url: str,
    model_file: str,
    confidence_threshold: float,
    shutdown_event: Event | None = None,
) -> None:
    """
    Main live loop: read frames, detect, track, dispatch.

    Args:
        runner: AssistantRunner whose tracker viewport matches the camera frames
        camera_url: Camera URL or device index
        model_file: YOLO weights (.pt)
        confidence_threshold: Minimum detection confidence passed to YOLO
        shutdown_event: Set to stop the loop
    """
    cap = initialize_camera(camera_url)
    model = initialize_model(model_file)
    names = dict(model.names)
    device = "cuda" if torch.cuda.is_available() else "cpu"

    logger.info("Live detection started")
    try:
        while not (shutdown_event and shutdown_event.is_set()):
            ret, frame = cap.read()
            if not ret:
                logger.warning("Failed to read frame")
                break

            results = model.predict(
                source=frame, conf=confidence_threshold, device=device, verbose=False
            )
            runner.process_frame(detections_from_results(results, names), time.time())

    except KeyboardInterrupt:
        logger.info("Live detection stopped by user")
    finally:
        cap.release()
        runner.log_final_stats()


def probe_frame_size(camera_url: str) -> tuple[int, int]:
    """Open the camera briefly to learn its frame size (width, height)."""
    cap = initialize_camera(camera_url)
    try:
        ret, frame = cap.read()
        if not ret:
            raise RuntimeError("Failed to read first frame from camera")
        height, width = frame.shape[:2]
        return width, height
    finally:
        cap.release()
