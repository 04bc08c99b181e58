# didadmin/services/dialb_service.py
# -*- coding: utf-8 -*-
"""
DialB Service
Spam/clean reputation records per phone number: CRUD, CSV import/export,
statistics, and the status lookup used to badge DIDs.
"""
import csv
import io

from flask import current_app

from didadmin.database.records import DialBRecord, DIALB_STATUSES
from didadmin.imports.csv_parser import parse_csv
from didadmin.storage.registry import get_stores
from didadmin.utils.exceptions import ResourceNotFound, HeaderMismatch, EmptyDataset
from didadmin.utils.phone import match_digits

DIALB_CSV_HEADERS = ('Phone Number', 'Group', 'Overall Status', 'T-Mobile', 'AT&T', '3rd Party', 'Last Checked')
UNKNOWN_STATUS = 'Unknown'


def _flag(value: str) -> bool:
    return value.strip().lower() == 'true'


class DialBService:

    @staticmethod
    def get_all_records() -> list[DialBRecord]:
        return get_stores().dialb.all()

    @staticmethod
    def get_record_by_id(record_id: str) -> DialBRecord | None:
        return get_stores().dialb.get(record_id)

    @staticmethod
    def get_by_phone(phone_number: str) -> DialBRecord | None:
        """Exact match on the stored phone number string."""
        return get_stores().dialb.first(lambda r: r.phone_number == phone_number)

    @staticmethod
    def create_record(data: dict) -> DialBRecord:
        record = get_stores().dialb.add(DialBRecord(**data))
        current_app.logger.info(f"DialB record for '{record.phone_number}' created (ID: {record.id}).")
        return record

    @staticmethod
    def update_record(record_id: str, update_data: dict) -> DialBRecord:
        """Raises ResourceNotFound when the record does not exist."""
        record = get_stores().dialb.update(record_id, update_data)
        if record is None:
            raise ResourceNotFound(f"DialB record with ID {record_id} not found.")
        current_app.logger.info(f"DialB record {record_id} updated. Fields: {sorted(update_data.keys())}")
        return record

    @staticmethod
    def delete_record(record_id: str) -> None:
        if not get_stores().dialb.delete(record_id):
            raise ResourceNotFound(f"DialB record with ID {record_id} not found.")
        current_app.logger.info(f"DialB record {record_id} deleted.")

    @staticmethod
    def delete_many(record_ids: list[str]) -> int:
        removed = get_stores().dialb.delete_many(record_ids)
        current_app.logger.info(f"Deleted {len(removed)} DialB records.")
        return len(removed)

    # --- DID badge lookup ---

    @staticmethod
    def status_lookup() -> dict[str, str]:
        """Map of comparable digits -> overall status. The first record for a number wins."""
        lookup = {}
        for record in get_stores().dialb.all():
            lookup.setdefault(match_digits(record.phone_number), record.overall_status)
        return lookup

    @staticmethod
    def status_from_lookup(lookup: dict[str, str], did_number: str) -> str:
        digits = match_digits(did_number)
        if not digits:
            return UNKNOWN_STATUS
        return lookup.get(digits, UNKNOWN_STATUS)

    @staticmethod
    def status_for_did(did_number: str) -> str:
        """'Clean', 'Spam' or 'Unknown' for a DID, matching on the 10-digit number."""
        return DialBService.status_from_lookup(DialBService.status_lookup(), did_number)

    # --- CSV ---

    @staticmethod
    def import_csv(text: str) -> dict:
        """
        Upsert DialB records from CSV text keyed by phone number.

        Rows that cannot be used are reported in ``errors`` as 'Row N: ...' (N counts data rows after
        the header) and skipped; the other rows are still imported. ``imported`` counts
        every accepted row, so a number repeated in the file counts each time.

        Returns:
            dict: {'success': True, 'imported': int, 'errors': [str]}

        Raises:
            HeaderMismatch: An expected header is missing.
            EmptyDataset: The file is empty.
        """
        rows = parse_csv(text)
        if not rows:
            raise EmptyDataset()

        headers = [cell.strip() for cell in rows[0]]
        if any(expected not in headers for expected in DIALB_CSV_HEADERS):
            raise HeaderMismatch(DIALB_CSV_HEADERS)
        positions = {name: headers.index(name) for name in DIALB_CSV_HEADERS}

        dialb = get_stores().dialb
        by_phone = {record.phone_number: record for record in dialb.all()}
        errors = []
        new_records = []
        updates = {}
        accepted = 0

        for row_number, row in enumerate(rows[1:], start=1):
            if len(row) < len(DIALB_CSV_HEADERS):
                errors.append(f"Row {row_number}: Insufficient data columns")
                continue
            values = {name: row[position].strip() if position < len(row) else ''
                      for name, position in positions.items()}
            phone_number = values['Phone Number']
            if not phone_number:
                errors.append(f"Row {row_number}: Missing phone number")
                continue
            if values['Overall Status'] not in DIALB_STATUSES:
                errors.append(f"Row {row_number}: Invalid overall status '{values['Overall Status']}'")
                continue
            accepted += 1

            fields = {
                'group': values['Group'],
                'overall_status': values['Overall Status'],
                'tmobile_flag': _flag(values['T-Mobile']),
                'att_flag': _flag(values['AT&T']),
                'third_party_flag': _flag(values['3rd Party']),
                'last_checked': values['Last Checked'],
            }
            existing = by_phone.get(phone_number)
            if existing is not None and existing.id:
                updates[existing.id] = fields
            elif existing is not None:
                # Same number twice in one file: the later row wins
                for key, value in fields.items():
                    setattr(existing, key, value)
            else:
                record = DialBRecord(phone_number=phone_number, **fields)
                by_phone[phone_number] = record
                new_records.append(record)

        for record_id, fields in updates.items():
            dialb.update(record_id, fields)
        dialb.add_many(new_records)

        current_app.logger.info(
            f"DialB import: {len(new_records)} added, {len(updates)} updated, {len(errors)} rows rejected."
        )
        return {'success': True, 'imported': accepted, 'errors': errors}

    @staticmethod
    def export_csv() -> str:
        """All records as CSV with the import headers; every value quoted."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
        buffer.write(','.join(DIALB_CSV_HEADERS) + '\n')
        for record in get_stores().dialb.all():
            writer.writerow([
                record.phone_number,
                record.group,
                record.overall_status,
                'true' if record.tmobile_flag else 'false',
                'true' if record.att_flag else 'false',
                'true' if record.third_party_flag else 'false',
                record.last_checked,
            ])
        return buffer.getvalue()

    @staticmethod
    def statistics() -> dict:
        records = get_stores().dialb.all()
        return {
            'total': len(records),
            'clean': sum(1 for r in records if r.overall_status == 'Clean'),
            'spam': sum(1 for r in records if r.overall_status == 'Spam'),
            'tmobile_flagged': sum(1 for r in records if r.tmobile_flag),
            'att_flagged': sum(1 for r in records if r.att_flag),
            'third_party_flagged': sum(1 for r in records if r.third_party_flag),
            'groups': len({r.group for r in records}),
        }
