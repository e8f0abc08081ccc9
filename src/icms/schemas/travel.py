from datetime import datetime
from typing import ClassVar

from pydantic import Field

from ..models.enums import BookingStatus, CommunicationStatus, CommunicationType, PersonType, TravelStatus
from .base import CamelModel, RequiredStr, make_partial


# ======================================================================
# Request aggregate
# ======================================================================

class DestinationIn(CamelModel):
    city: str | None = None
    country: str | None = None
    arrival_date: datetime | None = None
    departure_date: datetime | None = None
    notes: str | None = None


class TravelRequestCreate(CamelModel):
    nested_fields: ClassVar[frozenset[str]] = frozenset({"destinations"})

    created_by_id: int | None = None
    trip_start_date: datetime | None = None
    trip_end_date: datetime | None = None
    notes: str | None = None
    destinations: list[DestinationIn] | None = None


class TravelRequestUpdate(CamelModel):
    """`requestNumber` is accepted but never applied."""

    request_number: str | None = None
    created_by_id: int | None = None
    trip_start_date: datetime | None = None
    trip_end_date: datetime | None = None
    notes: str | None = None
    status: TravelStatus | None = None
    changed_by_id: int | None = None
    status_change_notes: str | None = None


# ======================================================================
# Components
# ======================================================================

class PersonRefIn(CamelModel):
    person_type: PersonType
    person_id: int


class ComponentBase(CamelModel):
    travel_request_id: int
    status: BookingStatus | None = None
    booking_reference: str | None = None
    notes: str | None = None


class FlightPassengerIn(PersonRefIn):
    seat_number: str | None = None
    meal_preference: str | None = None
    special_assistance: str | None = None


class FlightCreate(ComponentBase):
    nested_fields: ClassVar[frozenset[str]] = frozenset({"passengers"})

    airline: str | None = None
    flight_number: str | None = None
    departure_airport: str | None = None
    arrival_airport: str | None = None
    departure_date: datetime | None = None
    departure_time: str | None = None
    arrival_date: datetime | None = None
    arrival_time: str | None = None
    flight_class: str | None = Field(None, alias="class")
    price: float | None = None
    terminal: str | None = None
    gate: str | None = None
    seat_numbers: str | None = None
    baggage_allowance: str | None = None
    meal_preference: str | None = None
    aircraft_model: str | None = None
    trip_type: str | None = None
    special_requests: str | None = None
    passengers: list[FlightPassengerIn] | None = None


class HotelRoomIn(CamelModel):
    nested_fields: ClassVar[frozenset[str]] = frozenset({"assignments"})

    unit_category: str | None = None
    room_number: str | None = None
    bathrooms: int | None = None
    has_pantry: bool | None = None
    guest_numbers: int | None = None
    bed_type: str | None = None
    connected_to_room: str | None = None
    price_per_night: float | None = None
    assignments: list[PersonRefIn] | None = None


HotelRoomUpdate = make_partial(HotelRoomIn, "HotelRoomUpdate")


class HotelCreate(ComponentBase):
    nested_fields: ClassVar[frozenset[str]] = frozenset({"rooms"})

    hotel_name: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    phone: str | None = None
    email: str | None = None
    check_in_date: datetime | None = None
    check_out_date: datetime | None = None
    confirmation_number: str | None = None
    rooms: list[HotelRoomIn] | None = None


class TrainCreate(ComponentBase):
    train_number: str | None = None
    route: str | None = None
    departure_station: str | None = None
    arrival_station: str | None = None
    departure_date: datetime | None = None
    departure_time: str | None = None
    arrival_date: datetime | None = None
    arrival_time: str | None = None
    train_class: str | None = Field(None, alias="class")


class PrivateJetCreate(ComponentBase):
    aircraft_type: str | None = None
    operator: str | None = None
    tail_number: str | None = None
    departure_airport: str | None = None
    arrival_airport: str | None = None
    departure_date: datetime | None = None
    departure_time: str | None = None
    arrival_date: datetime | None = None
    arrival_time: str | None = None
    passenger_capacity: int | None = None
    amenities: str | None = None
    catering_details: str | None = None


class RentalCarCreate(ComponentBase):
    rental_company: str | None = None
    car_type: str | None = None
    car_model: str | None = None
    pickup_location: str | None = None
    pickup_date: datetime | None = None
    pickup_time: str | None = None
    return_location: str | None = None
    return_date: datetime | None = None
    return_time: str | None = None
    driver_person_type: PersonType | None = None
    driver_person_id: int | None = None
    additional_drivers: list[dict] | None = None
    insurance_type: str | None = None


class CarWithDriverCreate(ComponentBase):
    rental_company: str | None = None
    car_type: str | None = None
    driver_name: str | None = None
    driver_phone: str | None = None
    number_of_passengers: int | None = None
    pickup_location: str | None = None
    pickup_date: datetime | None = None
    pickup_time: str | None = None
    return_location: str | None = None
    return_date: datetime | None = None
    return_time: str | None = None


class EventCreate(ComponentBase):
    nested_fields: ClassVar[frozenset[str]] = frozenset({"participants"})

    event_type: str | None = None
    event_name: str | None = None
    description: str | None = None
    location: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    event_date: datetime | None = None
    start_time: str | None = None
    end_time: str | None = None
    price_per_person: float | None = None
    total_price: float | None = None
    currency: str | None = None
    contact_person: str | None = None
    contact_phone: str | None = None
    contact_email: str | None = None
    dress_code: str | None = None
    participants: list[PersonRefIn] | None = None


class EmbassyServiceCreate(CamelModel):
    travel_request_id: int
    submission_date: datetime | None = None
    arrival_contact_person: str | None = None
    arrival_contact_phone: str | None = None
    arrival_contact_email: str | None = None
    same_departure_contact: bool | None = None
    departure_contact_person: str | None = None
    departure_contact_phone: str | None = None
    departure_contact_email: str | None = None
    passengers_arrival_count: int | None = None
    passengers_departure_count: int | None = None
    arrival_time: str | None = None
    departure_time: str | None = None
    status: BookingStatus | None = None
    notes: str | None = None


class MeetAssistCreate(ComponentBase):
    service_type: str | None = None
    service_provider: str | None = None
    airport: str | None = None
    airport_name: str | None = None
    terminal: str | None = None
    flight_number: str | None = None
    service_date: datetime | None = None
    service_time: str | None = None
    meeting_point: str | None = None
    greeter_name: str | None = None
    greeter_phone: str | None = None
    number_of_passengers: int | None = None
    vip_level: str | None = None
    includes_fast_track: bool | None = None
    includes_lounge: bool | None = None
    includes_porterage: bool | None = None
    includes_buggy: bool | None = None
    price_per_person: float | None = None
    total_price: float | None = None
    currency: str | None = None


class PassengerCreate(CamelModel):
    travel_request_id: int
    person_type: PersonType
    person_id: int
    is_main_passenger: bool | None = None
    notification_preference: str | None = None
    receive_flight_details: bool | None = None
    receive_hotel_details: bool | None = None
    receive_event_details: bool | None = None
    receive_itinerary: bool | None = None
    notes: str | None = None


class CommunicationCreate(CamelModel):
    travel_request_id: int
    recipient_person_type: PersonType | None = None
    recipient_person_id: int | None = None
    communication_type: CommunicationType
    content_type: str | None = None
    subject: str | None = None
    message: RequiredStr
    html_content: str | None = None
    status: CommunicationStatus | None = None
    external_message_id: str | None = None
    error_message: str | None = None
