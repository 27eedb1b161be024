#!/usr/bin/env python3
# python src/book.py -caseId <caseId> -queueId <queueId> -token <token>
#
# caseId is in the address bar of https://inpol.mazowieckie.pl/home/cases/{caseId}.
# Pick "Make an appointment at the office", a location and a queue, then take
# queueId and the bearer token from the .../reservations/queue/{queueId}/dates
# request in the browser's network tab.
import argparse
import logging
import sys

from models import Credentials
from utils import (
    InpolError,
    add_latency,
    display_info_dict,
    display_slots,
    fetch_available_dates,
    fetch_profile,
    fetch_slots,
    new_session,
    reserve_first,
)

log = logging.getLogger("book")

EXIT_RESERVED = 0
EXIT_FAILED = 1
EXIT_NOT_RESERVED = 3


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Reserve the first free slot in an inpol.mazowieckie.pl queue"
    )
    parser.add_argument(
        "-caseId",
        dest="case_id",
        required=True,
        help="Case id, e.g. c4e64338-37c7-11ec-8d3d-0242ac130003",
    )
    parser.add_argument(
        "-queueId",
        dest="queue_id",
        required=True,
        help="Queue id, e.g. b8ce0ab6-cd6f-4bc7-ab6b-c125b8f31b86",
    )
    parser.add_argument(
        "-token", dest="token", required=True, help="Bearer token, e.g. ABCDEF12345"
    )
    args = parser.parse_args(argv)
    for flag, value in (
        ("-caseId", args.case_id),
        ("-queueId", args.queue_id),
        ("-token", args.token),
    ):
        if not value.strip():
            parser.error(f"argument {flag}: must not be empty")
    return args


def book(session, credentials, delay=add_latency):
    profile = fetch_profile(session, credentials, delay=delay)
    log.info(f"Actual profile is : {profile.first_name} {profile.surname}")

    available_dates = fetch_available_dates(session, credentials, delay=delay)
    log.info(f"Available dates are: {', '.join(available_dates)}")

    slots = fetch_slots(session, credentials, available_dates, delay=delay)
    log.info(f"Available slots: {len(slots)}")
    display_slots(slots)

    return reserve_first(session, credentials, slots, profile, delay=delay)


def main(argv=None, session=None, delay=add_latency):
    args = parse_args(argv)
    credentials = Credentials(args.case_id, args.queue_id, args.token)
    display_info_dict({"caseId": credentials.case_id, "queueId": credentials.queue_id})

    try:
        result = book(session or new_session(), credentials, delay=delay)
    except InpolError as e:
        log.error(str(e))
        print("Exiting Script")
        return EXIT_FAILED

    if result.reserved:
        print(f"It's your lucky day! Reserved {result.slot.date}")
        return EXIT_RESERVED

    print(f"Nothing reserved ({result.outcome.value}, {result.attempts} attempts)")
    return EXIT_NOT_RESERVED


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(main())
