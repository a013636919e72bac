from sqlalchemy import insert

from models import Counter
from services import sequence_service
from services.sequence_service import next_code


def test_first_code_creates_counter(db):
     assert next_code(db, "invoice", "INV", 3) == "INV001"

     counter = db.get(Counter, "invoice")
     assert counter.seq == 1
     assert counter.prefix == "INV"
     assert counter.pad == 3


def test_codes_increase_per_kind(db):
     codes = [next_code(db, "invoice", "INV") for _ in range(3)]
     assert codes == ["INV001", "INV002", "INV003"]

     assert next_code(db, "payment", "PMT") == "PMT001"
     assert next_code(db, "financeReport", "FREP", 4) == "FREP0001"
     assert next_code(db, "invoice", "INV") == "INV004"


def test_stored_prefix_and_pad_win_over_defaults(db):
     db.add(Counter(kind="invoice", seq=41, prefix="BH", pad=5))
     db.flush()

     assert next_code(db, "invoice", "INV", 3) == "BH00042"


def test_sequence_grows_past_padding(db):
     db.add(Counter(kind="payment", seq=999, prefix="PMT", pad=3))
     db.flush()

     assert next_code(db, "payment", "PMT") == "PMT1000"


def test_concurrent_first_use_falls_back_to_increment(db, monkeypatch):
     real_increment = sequence_service._increment
     calls = []

     def increment_after_other_caller_created_counter(session, kind):
          calls.append(kind)
          if len(calls) == 1:
               # another caller inserts the counter between our UPDATE and INSERT
               session.execute(insert(Counter).values(kind=kind, seq=1, prefix="INV", pad=3))
               return False
          return real_increment(session, kind)

     monkeypatch.setattr(sequence_service, "_increment", increment_after_other_caller_created_counter)

     assert next_code(db, "invoice", "INV", 3) == "INV002"
     assert len(calls) == 2
     assert db.get(Counter, "invoice").seq == 2

     # the session stays usable after the rejected insert
     assert next_code(db, "invoice", "INV", 3) == "INV003"
