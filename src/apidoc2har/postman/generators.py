"""Postman dynamic variables (`{{$guid}}`, `{{$randomInt}}`, ...) backed by Faker."""

import string
import time
from datetime import datetime, timezone
from typing import Any, Callable

from faker import Faker

Generator = Callable[[], Any]

ABBREVIATIONS = (
    "ADP", "AGP", "AI", "CSS", "EXE", "FTP", "GB", "HDD", "HTTP", "IB", "JBOD", "JSON",
    "PCI", "PNG", "RAM", "RSS", "SAS", "SCSI", "SDD", "SMS", "SMTP", "SQL", "SSL", "TCP",
    "THX", "USB", "XML", "XSS",
)

_ALPHANUMERIC = tuple(string.ascii_lowercase + string.digits)


def default_generators(faker: Faker | None = None, seed: int | None = None) -> dict[str, Generator]:
    """Build the registry of dynamic variable name -> zero-argument generator."""
    fake = faker or Faker()
    if seed is not None:
        fake.seed_instance(seed)

    return {
        # common
        "$guid": fake.uuid4,
        "$timestamp": lambda: int(time.time()),
        "$isoTimestamp": lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
        "$randomUUID": fake.uuid4,
        # text, numbers and colors
        "$randomAlphaNumeric": lambda: fake.random_element(_ALPHANUMERIC),
        "$randomBoolean": fake.pybool,
        "$randomInt": lambda: fake.random_int(0, 1000),
        "$randomColor": fake.safe_color_name,
        "$randomHexColor": fake.hex_color,
        "$randomAbbreviation": lambda: fake.random_element(ABBREVIATIONS),
        # internet
        "$randomIP": fake.ipv4,
        "$randomIPV6": fake.ipv6,
        "$randomMACAddress": fake.mac_address,
        "$randomPassword": lambda: fake.password(length=15, special_chars=False),
        "$randomLocale": fake.language_code,
        "$randomUserAgent": fake.user_agent,
        "$randomProtocol": lambda: fake.random_element(("http", "https")),
        "$randomSemver": lambda: ".".join(str(fake.random_int(0, 9)) for _ in range(3)),
        "$randomDomainName": fake.domain_name,
        "$randomDomainSuffix": fake.tld,
        "$randomDomainWord": fake.domain_word,
        "$randomEmail": fake.email,
        "$randomExampleEmail": lambda: f"{fake.user_name()}@example.com",
        "$randomUserName": fake.user_name,
        "$randomUrl": fake.url,
        # names and profession
        "$randomFirstName": fake.first_name,
        "$randomLastName": fake.last_name,
        "$randomFullName": fake.name,
        "$randomNamePrefix": fake.prefix,
        "$randomNameSuffix": fake.suffix,
        "$randomJobTitle": fake.job,
        "$randomPhoneNumber": fake.phone_number,
        # location
        "$randomCity": fake.city,
        "$randomStreetName": fake.street_name,
        "$randomStreetAddress": fake.street_address,
        "$randomCountry": fake.country,
        "$randomCountryCode": fake.country_code,
        "$randomLatitude": lambda: str(fake.latitude()),
        "$randomLongitude": lambda: str(fake.longitude()),
        # business and finance
        "$randomCompanyName": fake.company,
        "$randomCatchPhrase": fake.catch_phrase,
        "$randomBs": fake.bs,
        "$randomPrice": lambda: f"{fake.pyfloat(min_value=0, max_value=1000, right_digits=2):.2f}",
        "$randomCurrencyCode": fake.currency_code,
        "$randomCurrencyName": fake.currency_name,
        "$randomBankAccount": lambda: fake.numerify("########"),
        "$randomBankAccountIban": fake.iban,
        "$randomBankAccountBic": fake.swift,
        # files
        "$randomFileName": fake.file_name,
        "$randomFileExt": fake.file_extension,
        "$randomFilePath": fake.file_path,
        "$randomMimeType": fake.mime_type,
        # dates
        "$randomDateFuture": lambda: fake.future_datetime().isoformat(),
        "$randomDatePast": lambda: fake.past_datetime().isoformat(),
        "$randomDateRecent": lambda: fake.date_time_this_month().isoformat(),
        "$randomWeekday": fake.day_of_week,
        "$randomMonth": fake.month_name,
        # lorem
        "$randomWord": fake.word,
        "$randomWords": lambda: " ".join(fake.words(3)),
        "$randomLoremWord": fake.word,
        "$randomLoremSentence": fake.sentence,
        "$randomLoremParagraph": fake.paragraph,
        "$randomLoremSlug": fake.slug,
    }
