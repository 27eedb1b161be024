import copy
import logging
import random
import time

import requests
import tabulate

from models import (
    DecodeError,
    Outcome,
    ReservationResult,
    parse_dates,
    parse_profile,
    parse_slots,
)

log = logging.getLogger(__name__)

INPOL_URL = "https://inpol.mazowieckie.pl"
INPOL_BASE_URL = f"{INPOL_URL}/api/"
CASES_URL = f"{INPOL_URL}/home/cases/{{0}}"
RESERVE_URL = INPOL_BASE_URL + "reservations/queue/{0}/reserve"
DATES_URL = INPOL_BASE_URL + "reservations/queue/{0}/dates"
SLOTS_URL = INPOL_BASE_URL + "reservations/queue/{0}/{1}/slots"

MIN_LATENCY_MS = 100
MAX_LATENCY_MS = 1099

BASE_HEADERS = {
    "sec-ch-ua": '"Chromium";v="95", ";Not A Brand";v="99"',
    "Accept": "application/json, text/plain, */*",
    "Content-Type": "application/json",
    "sec-ch-ua-mobile": "?0",
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/95.0.4638.54 Safari/537.36",
    "sec-ch-ua-platform": '"Linux"',
    "Origin": INPOL_URL,
    "Sec-Fetch-Site": "same-origin",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Dest": "empty",
    "Accept-Language": "en-US,en;q=0.9,pl-PL;q=0.8,pl;q=0.7,"
    "be-BY;q=0.6,be;q=0.5,ru-RU;q=0.4,ru;q=0.3",
    "Cookie": "cookieconsent_status=dismiss",
}


class InpolError(Exception):
    pass


class UnexpectedResponse(InpolError):
    def __init__(self, response):
        self.response = response
        self.status_code = response.status_code
        super().__init__(
            f"Unknown response {response.status_code} "
            f"from {response.url}: {response.text}"
        )


class ResponseDecodeError(InpolError, DecodeError):
    pass


def create_headers(credentials):
    request_header = copy.deepcopy(BASE_HEADERS)
    request_header["Authorization"] = f"Bearer {credentials.token}"
    request_header["Referer"] = CASES_URL.format(credentials.case_id)
    return request_header


def make_latency(rng=None, sleep=None):
    """
    Build a delay callable that blocks for a random
    MIN_LATENCY_MS..MAX_LATENCY_MS interval, drawn from rng.
    """
    rng = rng or random.Random()

    def delay():
        (sleep or time.sleep)(rng.randint(MIN_LATENCY_MS, MAX_LATENCY_MS) / 1000)

    return delay


# Keeps the request rate low enough not to trip the portal's abuse detection.
add_latency = make_latency()


def decode_json(resp, parser):
    try:
        data = resp.json()
    except ValueError as e:
        raise ResponseDecodeError(f"Response from {resp.url} is not JSON: {e}")
    try:
        return parser(data)
    except DecodeError as e:
        raise ResponseDecodeError(f"Response from {resp.url}: {e}")


def fetch_profile(session, credentials, delay=add_latency):
    resp = session.get(
        RESERVE_URL.format(credentials.queue_id),
        headers=create_headers(credentials),
    )
    log.debug(f"Profile Response Code: {resp.status_code}")

    if resp.status_code != 200:
        raise UnexpectedResponse(resp)

    profile = decode_json(resp, parse_profile)
    delay()
    return profile


def fetch_available_dates(session, credentials, delay=add_latency):
    resp = session.get(
        DATES_URL.format(credentials.queue_id),
        headers=create_headers(credentials),
    )
    log.debug(f"Dates Response Code: {resp.status_code}")

    if resp.status_code != 200:
        raise UnexpectedResponse(resp)

    dates = decode_json(resp, parse_dates)
    delay()
    return dates


def fetch_slots(session, credentials, available_dates, delay=add_latency):
    """
    This function
        1. Queries the slots of every available date, in the given order,
        2. Skips a date whose slots cannot be fetched, and
        3. Returns all slots found, in date-then-server order
    """
    slots = []
    for available_date in available_dates:
        resp = session.get(
            SLOTS_URL.format(credentials.queue_id, available_date),
            headers=create_headers(credentials),
        )

        if resp.status_code != 200:
            log.warning(
                f"Unknown response {resp.status_code} for slots "
                f"on {available_date}, skipping"
            )
        else:
            try:
                slots += decode_json(resp, parse_slots)
            except ResponseDecodeError as e:
                log.warning(f"Skipping {available_date}: {e}")

        delay()

    return slots


def reserve_first(session, credentials, slots, profile, delay=add_latency):
    """
    This function
        1. Attempts to reserve each slot in turn,
        2. Stops at the first slot the server accepts, and
        3. Returns a ReservationResult telling what happened
    """
    if not slots:
        log.warning("No slots to reserve")
        return ReservationResult(Outcome.NO_SLOTS)

    request_header = create_headers(credentials)
    request_header["Origin"] = INPOL_URL

    attempts = 0
    for slot in slots:
        details = {
            "proceedingId": credentials.case_id,
            "slotId": slot.id,
            "name": profile.first_name,
            "lastName": profile.surname,
            "dateOfBirth": profile.date_of_birth,
        }
        resp = session.post(
            RESERVE_URL.format(credentials.queue_id),
            headers=request_header,
            json=details,
        )
        attempts += 1

        if resp.status_code == 200:
            log.warning(f"Slot RESERVED for you {slot.date}")
            return ReservationResult(Outcome.RESERVED, slot=slot, attempts=attempts)

        log.info(f"Slot is already reserved {slot.date} ({resp.status_code})")
        delay()

    log.warning(f"All {attempts} slots are taken, nothing reserved")
    return ReservationResult(Outcome.EXHAUSTED, attempts=attempts)


def display_table(dict_list):
    """
    This function
        1. Takes a list of dictionary
        2. Add an Index column, and
        3. Displays the data in tabular format
    """
    if dict_list:
        header = ["idx"] + list(dict_list[0].keys())
        rows = [[idx + 1] + list(x.values()) for idx, x in enumerate(dict_list)]
        print(tabulate.tabulate(rows, header, tablefmt="grid"))


def display_info_dict(details):
    for key, value in details.items():
        if isinstance(value, list):
            if all(isinstance(item, dict) for item in value):
                print(f"\t{key}:")
                display_table(value)
            else:
                print(f"\t{key}\t: {value}")
        else:
            print(f"\t{key}\t: {value}")


def display_slots(slots):
    display_table([{"slot_id": slot.id, "date": slot.date} for slot in slots])


def new_session():
    return requests.Session()
