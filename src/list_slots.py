# python src/list_slots.py --case_id <caseId> --queue_id <queueId> --token <token>
import logging

import fire

from models import Credentials
from utils import (
    display_info_dict,
    display_slots,
    fetch_available_dates,
    fetch_profile,
    fetch_slots,
    new_session,
)


def main(case_id: str, queue_id: str, token: str) -> None:
    """Show the profile, available dates and slots without reserving anything."""
    credentials = Credentials(str(case_id), str(queue_id), str(token))
    session = new_session()

    profile = fetch_profile(session, credentials)
    display_info_dict(
        {
            "name": f"{profile.first_name} {profile.surname}",
            "dateOfBirth": profile.date_of_birth,
        }
    )

    available_dates = fetch_available_dates(session, credentials)
    display_info_dict({"dates": available_dates})

    slots = fetch_slots(session, credentials, available_dates)
    if slots:
        display_slots(slots)
    else:
        print("No slots available.")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    fire.Fire(main)
