"""
Feature Request Pipeline
extract → sanitize → classify → project → deliver, one submission per run
"""

from typing import Optional

import structlog

from services.classify.classifier import FeatureClassifier, build_fallback_record
from services.classify.generator import OllamaGenerator, TextGenerator
from services.classify.ticket_writer import TicketWriter, build_fallback_ticket
from services.extract.extractor import FieldExtractor, RawSubmission
from services.extract.text_parser import AnchorTextParser, LLMTextParser
from services.normalize.sanitizer import FieldSanitizer
from shared.errors import ClassificationError, ClassificationUnusable, ExtractionError, SinkError
from shared.schemas.record import ClassifiedRecord, PipelineResult, SheetRow
from shared.schemas.submission import SanitizedFields
from shared.schemas.ticket import TicketSpec

from . import config as settings
from .config import InputShape, PipelineConfig
from .projector import project_row
from .sinks import (
    JsonlSheetSink,
    JsonlTicketSink,
    LoggingSheetSink,
    LoggingTicketSink,
    SheetSink,
    TicketSink,
)

logger = structlog.get_logger()


class FeatureRequestPipeline:
    """
    Runs a single submission through every stage.

    This is the only place that decides whether a failure is fatal:
    - ExtractionError: fatal, nothing is delivered
    - TextParserError: fatal internal failure, nothing is delivered
    - ClassificationUnusable: fallback record/ticket, or ClassificationError
      under strict_classification
    - SinkError: recorded on the result, the record stands
    """

    def __init__(
        self,
        config: PipelineConfig,
        extractor: FieldExtractor,
        sanitizer: FieldSanitizer,
        classifier: FeatureClassifier,
        ticket_writer: Optional[TicketWriter] = None,
        sheet_sink: Optional[SheetSink] = None,
        ticket_sink: Optional[TicketSink] = None,
    ):
        if config.emit_ticket and ticket_writer is None:
            raise ValueError("emit_ticket requires a ticket_writer")
        self.config = config
        self.extractor = extractor
        self.sanitizer = sanitizer
        self.classifier = classifier
        self.ticket_writer = ticket_writer
        self.sheet_sink = sheet_sink
        self.ticket_sink = ticket_sink

    def run(self, raw: RawSubmission) -> PipelineResult:
        """
        Process one submission end-to-end.

        Raises:
            ExtractionError: mandatory field missing or wrong input shape
            TextParserError: notification text parser unavailable or unusable
            ClassificationError: strict mode and classifier output unusable
        """
        self._check_shape(raw)

        extracted = self.extractor.extract(raw)
        sanitized = self.sanitizer.sanitize(extracted)
        log = logger.bind(request_id=sanitized.request_id)

        record, record_fallback = self._classify(sanitized)

        ticket = None
        ticket_fallback = False
        if self.config.emit_ticket:
            ticket, ticket_fallback = self._write_ticket(sanitized)

        row = project_row(record) if self.config.emit_row else None

        deliveries, sink_errors = self._deliver(record, row, ticket)

        log.info(
            "Pipeline run complete",
            feature_name=record.feature_name,
            domain=record.domain,
            fallback=record_fallback or ticket_fallback,
            deliveries=deliveries,
        )
        return PipelineResult(
            record=record,
            row=row,
            ticket=ticket,
            fallback_used=record_fallback or ticket_fallback,
            deliveries=deliveries,
            sink_errors=sink_errors,
        )

    def _check_shape(self, raw: RawSubmission):
        is_text = isinstance(raw, str)
        if self.config.input_shape == InputShape.FREE_TEXT and not is_text:
            raise ExtractionError("expected notification text", source=InputShape.FREE_TEXT.value)
        if self.config.input_shape == InputShape.STRUCTURED and is_text:
            raise ExtractionError("expected a structured form response", source=InputShape.STRUCTURED.value)

    def _classify(self, fields: SanitizedFields) -> tuple[ClassifiedRecord, bool]:
        try:
            return self.classifier.classify(fields), False
        except ClassificationUnusable as e:
            if self.config.strict_classification:
                raise ClassificationError(e.reason, **e.context) from e
            logger.warning("Classification unusable, using fallback record", **e.to_dict())
            return build_fallback_record(fields), True

    def _write_ticket(self, fields: SanitizedFields) -> tuple[TicketSpec, bool]:
        try:
            return self.ticket_writer.write(fields), False
        except ClassificationUnusable as e:
            if self.config.strict_classification:
                raise ClassificationError(e.reason, **e.context) from e
            logger.warning("Ticket generation unusable, using fallback ticket", **e.to_dict())
            return build_fallback_ticket(fields), True

    def _deliver(
        self,
        record: ClassifiedRecord,
        row: Optional[SheetRow],
        ticket: Optional[TicketSpec],
    ) -> tuple[dict[str, bool], list[dict]]:
        deliveries: dict[str, bool] = {}
        errors: list[dict] = []

        if row is not None and self.sheet_sink is not None:
            try:
                self.sheet_sink.append(row)
                deliveries[self.sheet_sink.name] = True
            except SinkError as e:
                logger.error("Sheet sink failed", request_id=record.request_id, **e.to_dict())
                deliveries[self.sheet_sink.name] = False
                errors.append(e.to_dict())

        if ticket is not None and self.ticket_sink is not None:
            try:
                self.ticket_sink.create(ticket, record)
                deliveries[self.ticket_sink.name] = True
            except SinkError as e:
                logger.error("Ticket sink failed", request_id=record.request_id, **e.to_dict())
                deliveries[self.ticket_sink.name] = False
                errors.append(e.to_dict())

        return deliveries, errors


def build_pipeline(
    config: Optional[PipelineConfig] = None,
    generator: Optional[TextGenerator] = None,
    text_parser: Optional[str] = None,
    sheet_path: Optional[str] = None,
    ticket_path: Optional[str] = None,
) -> FeatureRequestPipeline:
    """Wire a pipeline from environment defaults and explicit overrides"""
    config = config or PipelineConfig.from_env()
    generator = generator or OllamaGenerator()

    parser_name = text_parser or settings.TEXT_PARSER
    parser = AnchorTextParser() if parser_name == "anchor" else LLMTextParser(generator)

    sheet_path = sheet_path or settings.SHEET_PATH
    ticket_path = ticket_path or settings.TICKET_PATH

    return FeatureRequestPipeline(
        config=config,
        extractor=FieldExtractor(text_parser=parser),
        sanitizer=FieldSanitizer(),
        classifier=FeatureClassifier(generator),
        ticket_writer=TicketWriter(generator, strict=config.strict_classification),
        sheet_sink=JsonlSheetSink(sheet_path) if sheet_path else LoggingSheetSink(),
        ticket_sink=JsonlTicketSink(ticket_path) if ticket_path else LoggingTicketSink(),
    )
