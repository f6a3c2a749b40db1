"""Report service.

Pages through a portal /report/ listing and keeps the records whose collection,
found at the parent of a dotted field path, has a length inside a LengthFilter.
"""

from tqdm import tqdm

from portal.clients.portal.PortalClientInterface import PortalClientInterface
from portal.clients.portal.models.ReportPage import PageFailure
from portal.helper.HelperConfig import HelperConfig
from portal.helper.field_path import ABSENT, get_length_field, measure_length, resolve_field_path
from portal.models.report import LengthFilter, ReportMatch


class ReportFetchError(Exception):
    """Raised when a report page could not be loaded."""

    def __init__(self, failure: PageFailure):
        super().__init__(f"Could not load report page {failure.url}: {failure.error}")
        self.failure = failure


def match_record(record: dict, length_field: str, length_filter: LengthFilter) -> ReportMatch | None:
    """Measure one record and return a match if its length passes the filter.

    An empty string never matches, even with a minimum of 0. An empty list does.

    Args:
        record (dict): One record of a report page.
        length_field (str): Dotted path of the value to measure (already the parent path).
        length_filter (LengthFilter): Inclusive length bounds.

    Returns:
        ReportMatch | None: The match, or None if the value is absent, empty text, has no length, or is out of bounds.
    """
    value = resolve_field_path(record, length_field)
    if value is ABSENT or value == "":
        return None
    length = measure_length(value)
    if length is None or not length_filter.contains(length):
        return None
    return ReportMatch(record_id=str(record.get("@id")), length=length)


class ReportService:
    """Runs the paginated fetch-and-filter loop against one portal client."""

    def __init__(
        self,
        helper_config: HelperConfig,
        portal_client: PortalClientInterface,
        show_progress: bool = True,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._portal_client = portal_client
        self._show_progress = show_progress

    async def do_fetch_report(
        self,
        record_type: str,
        field: str,
        length_filter: LengthFilter,
        filters: str = "",
    ) -> list[ReportMatch]:
        """Fetch every page of a report and collect the matching records.

        Pages are requested one at a time at offsets 0, page_size, 2*page_size, … until a page
        comes back empty. The reported total only sizes the progress bar.

        Args:
            record_type (str): Type of records to list, e.g. "Experiment".
            field (str): Dotted field path; the length of its parent is measured.
            length_filter (LengthFilter): Inclusive length bounds.
            filters (str): Extra query-string filters, appended verbatim.

        Returns:
            list[ReportMatch]: Matches in page-then-record order.

        Raises:
            ReportFetchError: If any page fails to load. Nothing is retried.
        """
        length_field = get_length_field(field)
        page_size = self._portal_client.get_page_size()
        results: list[ReportMatch] = []
        offset = 0
        progress: tqdm | None = None

        try:
            while True:
                result = await self._portal_client.do_fetch_report_page(
                    record_type=record_type,
                    field=field,
                    filters=filters,
                    offset=offset,
                )
                if isinstance(result, PageFailure):
                    raise ReportFetchError(result)

                page = result.page
                if page.is_terminal:
                    break

                # size the progress bar once we know how many records to expect
                if progress is None:
                    self.logging.debug("Report for %s reports %s records in total", record_type, page.total)
                    progress = tqdm(total=page.total, disable=not self._show_progress, unit="rec")

                for record in page.graph:
                    match = match_record(record, length_field, length_filter)
                    if match is not None:
                        results.append(match)

                offset += page_size
                progress.n = offset
                progress.refresh()
        finally:
            if progress is not None:
                progress.close()

        self.logging.debug("Report for %s finished at offset %d with %d matches", record_type, offset, len(results))
        return results
