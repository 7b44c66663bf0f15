"""Built-in defaults for a Canonical Greenhouse instance.

Every value here can be overridden from a YAML config file, see
``config.settings.load_config``.
"""
from __future__ import annotations

GREENHOUSE_URL = "https://canonical.greenhouse.io"
AUTH_URL = "https://login.ubuntu.com"

COPY_FROM_BOARD = "Canonical"
COPY_TO_BOARD = "Canonical - Jobs"
TEST_JOB_BOARD = "Canonical - Test"
PROTECTED_JOB_BOARDS = ["Canonical", "Canonical - Internal"]

# Keys of ``greenhouse_job_application`` the create endpoint rejects when
# copied from an existing post.
FILTERED_ATTRIBUTES = [
    "id",
    "job_id",
    "created_at",
    "updated_at",
    "first_published_at",
    "live",
    "status",
    "job_post_questions_link",
]

_US_LOCATIONS = [
    "Home based - Americas, Boston, MA",
    "Home based - Americas, New York, NY",
    "Home based - Americas, San Francisco, CA",
    "Home based - Americas, Los Angeles, CA",
    "Home based - Americas, San Diego, CA",
    "Home based - Americas, San Jose, CA",
    "Home based - Americas, Seattle, WA",
    "Home based - Americas, Portland, OR",
    "Home based - Americas, Denver, CO",
    "Home based - Americas, Austin, TX",
    "Home based - Americas, Dallas, TX",
    "Home based - Americas, Houston, TX",
    "Home based - Americas, Chicago, IL",
    "Home based - Americas, Atlanta, GA",
    "Home based - Americas, Miami, FL",
    "Home based - Americas, Orlando, FL",
    "Home based - Americas, Tampa, FL",
    "Home based - Americas, Raleigh, NC",
    "Home based - Americas, Charlotte, NC",
    "Home based - Americas, Washington, DC",
    "Home based - Americas, Philadelphia, PA",
    "Home based - Americas, Pittsburgh, PA",
    "Home based - Americas, Baltimore, MD",
    "Home based - Americas, Minneapolis, MN",
    "Home based - Americas, Detroit, MI",
    "Home based - Americas, Columbus, OH",
    "Home based - Americas, Cleveland, OH",
    "Home based - Americas, Indianapolis, IN",
    "Home based - Americas, Nashville, TN",
    "Home based - Americas, St. Louis, MO",
    "Home based - Americas, Kansas City, MO",
    "Home based - Americas, Phoenix, AZ",
    "Home based - Americas, Salt Lake City, UT",
    "Home based - Americas, Las Vegas, NV",
    "Home based - Americas, Sacramento, CA",
    "Home based - Americas, Madison, WI",
    "Home based - Americas, Boulder, CO",
    "Home based - Americas, Richmond, VA",
    "Home based - Americas, Albuquerque, NM",
    "Home based - Americas, Honolulu, HI",
]

_CANADA_LOCATIONS = [
    "Home based - Americas, Toronto, ON, Canada",
    "Home based - Americas, Montreal, QC, Canada",
    "Home based - Americas, Vancouver, BC, Canada",
    "Home based - Americas, Ottawa, ON, Canada",
    "Home based - Americas, Calgary, AB, Canada",
    "Home based - Americas, Edmonton, AB, Canada",
    "Home based - Americas, Waterloo, ON, Canada",
    "Home based - Americas, Quebec City, QC, Canada",
    "Home based - Americas, Winnipeg, MB, Canada",
    "Home based - Americas, Halifax, NS, Canada",
]

_LATAM_LOCATIONS = [
    "Home based - Americas, Mexico City, Mexico",
    "Home based - Americas, Guadalajara, Mexico",
    "Home based - Americas, Monterrey, Mexico",
    "Home based - Americas, São Paulo, Brazil",
    "Home based - Americas, Rio de Janeiro, Brazil",
    "Home based - Americas, Belo Horizonte, Brazil",
    "Home based - Americas, Florianópolis, Brazil",
    "Home based - Americas, Porto Alegre, Brazil",
    "Home based - Americas, Buenos Aires, Argentina",
    "Home based - Americas, Córdoba, Argentina",
    "Home based - Americas, Santiago, Chile",
    "Home based - Americas, Bogotá, Colombia",
    "Home based - Americas, Medellín, Colombia",
    "Home based - Americas, Lima, Peru",
    "Home based - Americas, Montevideo, Uruguay",
    "Home based - Americas, Quito, Ecuador",
    "Home based - Americas, San José, Costa Rica",
    "Home based - Americas, Panama City, Panama",
    "Home based - Americas, Asunción, Paraguay",
    "Home based - Americas, Guatemala City, Guatemala",
]

REGIONS: dict[str, list[str]] = {
    "americas": _US_LOCATIONS + _CANADA_LOCATIONS + _LATAM_LOCATIONS,
    "latam": list(_LATAM_LOCATIONS),
    "apac": [
        "Home based - APAC, Bangalore, India",
        "Home based - APAC, Mumbai, India",
        "Home based - APAC, New Delhi, India",
        "Home based - APAC, Hyderabad, India",
        "Home based - APAC, Pune, India",
        "Home based - APAC, Chennai, India",
        "Home based - APAC, Kolkata, India",
        "Home based - APAC, Ahmedabad, India",
        "Home based - APAC, Noida, India",
        "Home based - APAC, Kochi, India",
        "Home based - APAC, Beijing, China",
        "Home based - APAC, Shanghai, China",
        "Home based - APAC, Shenzhen, China",
        "Home based - APAC, Guangzhou, China",
        "Home based - APAC, Hangzhou, China",
        "Home based - APAC, Chengdu, China",
        "Home based - APAC, Taipei, Taiwan",
        "Home based - APAC, Hsinchu, Taiwan",
        "Home based - APAC, Taichung, Taiwan",
        "Home based - APAC, Tokyo, Japan",
        "Home based - APAC, Osaka, Japan",
        "Home based - APAC, Kyoto, Japan",
        "Home based - APAC, Fukuoka, Japan",
        "Home based - APAC, Sapporo, Japan",
        "Home based - APAC, Nagoya, Japan",
        "Home based - APAC, Yokohama, Japan",
        "Home based - APAC, Seoul, South Korea",
        "Home based - APAC, Busan, South Korea",
        "Home based - APAC, Singapore, Singapore",
        "Home based - APAC, Kuala Lumpur, Malaysia",
        "Home based - APAC, Penang, Malaysia",
        "Home based - APAC, Jakarta, Indonesia",
        "Home based - APAC, Bandung, Indonesia",
        "Home based - APAC, Surabaya, Indonesia",
        "Home based - APAC, Manila, Philippines",
        "Home based - APAC, Cebu, Philippines",
        "Home based - APAC, Hanoi, Vietnam",
        "Home based - APAC, Ho Chi Minh City, Vietnam",
        "Home based - APAC, Bangkok, Thailand",
        "Home based - APAC, Chiang Mai, Thailand",
        "Home based - APAC, Sydney, Australia",
        "Home based - APAC, Melbourne, Australia",
        "Home based - APAC, Brisbane, Australia",
        "Home based - APAC, Perth, Australia",
        "Home based - APAC, Adelaide, Australia",
        "Home based - APAC, Canberra, Australia",
        "Home based - APAC, Hobart, Australia",
        "Home based - APAC, Gold Coast, Australia",
        "Home based - APAC, Auckland, New Zealand",
        "Home based - APAC, Wellington, New Zealand",
        "Home based - APAC, Christchurch, New Zealand",
        "Home based - APAC, Karachi, Pakistan",
        "Home based - APAC, Lahore, Pakistan",
        "Home based - APAC, Islamabad, Pakistan",
        "Home based - APAC, Dhaka, Bangladesh",
        "Home based - APAC, Colombo, Sri Lanka",
        "Home based - APAC, Kathmandu, Nepal",
        "Home based - APAC, Hong Kong, Hong Kong",
    ],
    "emea": [
        "Home based - EMEA, London, United Kingdom",
        "Home based - EMEA, Manchester, United Kingdom",
        "Home based - EMEA, Edinburgh, United Kingdom",
        "Home based - EMEA, Glasgow, United Kingdom",
        "Home based - EMEA, Bristol, United Kingdom",
        "Home based - EMEA, Cambridge, United Kingdom",
        "Home based - EMEA, Oxford, United Kingdom",
        "Home based - EMEA, Birmingham, United Kingdom",
        "Home based - EMEA, Leeds, United Kingdom",
        "Home based - EMEA, Belfast, United Kingdom",
        "Home based - EMEA, Cardiff, United Kingdom",
        "Home based - EMEA, Dublin, Ireland",
        "Home based - EMEA, Cork, Ireland",
        "Home based - EMEA, Galway, Ireland",
        "Home based - EMEA, Paris, France",
        "Home based - EMEA, Lyon, France",
        "Home based - EMEA, Toulouse, France",
        "Home based - EMEA, Marseille, France",
        "Home based - EMEA, Nantes, France",
        "Home based - EMEA, Bordeaux, France",
        "Home based - EMEA, Berlin, Germany",
        "Home based - EMEA, Munich, Germany",
        "Home based - EMEA, Hamburg, Germany",
        "Home based - EMEA, Frankfurt, Germany",
        "Home based - EMEA, Cologne, Germany",
        "Home based - EMEA, Stuttgart, Germany",
        "Home based - EMEA, Dresden, Germany",
        "Home based - EMEA, Leipzig, Germany",
        "Home based - EMEA, Amsterdam, Netherlands",
        "Home based - EMEA, Rotterdam, Netherlands",
        "Home based - EMEA, Utrecht, Netherlands",
        "Home based - EMEA, Eindhoven, Netherlands",
        "Home based - EMEA, Brussels, Belgium",
        "Home based - EMEA, Antwerp, Belgium",
        "Home based - EMEA, Ghent, Belgium",
        "Home based - EMEA, Madrid, Spain",
        "Home based - EMEA, Barcelona, Spain",
        "Home based - EMEA, Valencia, Spain",
        "Home based - EMEA, Seville, Spain",
        "Home based - EMEA, Malaga, Spain",
        "Home based - EMEA, Lisbon, Portugal",
        "Home based - EMEA, Porto, Portugal",
        "Home based - EMEA, Rome, Italy",
        "Home based - EMEA, Milan, Italy",
        "Home based - EMEA, Turin, Italy",
        "Home based - EMEA, Bologna, Italy",
        "Home based - EMEA, Florence, Italy",
        "Home based - EMEA, Zurich, Switzerland",
        "Home based - EMEA, Geneva, Switzerland",
        "Home based - EMEA, Lausanne, Switzerland",
        "Home based - EMEA, Vienna, Austria",
        "Home based - EMEA, Warsaw, Poland",
        "Home based - EMEA, Krakow, Poland",
        "Home based - EMEA, Wroclaw, Poland",
        "Home based - EMEA, Gdansk, Poland",
        "Home based - EMEA, Prague, Czech Republic",
        "Home based - EMEA, Brno, Czech Republic",
        "Home based - EMEA, Budapest, Hungary",
        "Home based - EMEA, Bucharest, Romania",
        "Home based - EMEA, Cluj-Napoca, Romania",
        "Home based - EMEA, Sofia, Bulgaria",
        "Home based - EMEA, Athens, Greece",
        "Home based - EMEA, Thessaloniki, Greece",
        "Home based - EMEA, Zagreb, Croatia",
        "Home based - EMEA, Belgrade, Serbia",
        "Home based - EMEA, Ljubljana, Slovenia",
        "Home based - EMEA, Copenhagen, Denmark",
        "Home based - EMEA, Aarhus, Denmark",
        "Home based - EMEA, Stockholm, Sweden",
        "Home based - EMEA, Gothenburg, Sweden",
        "Home based - EMEA, Malmö, Sweden",
        "Home based - EMEA, Oslo, Norway",
        "Home based - EMEA, Helsinki, Finland",
        "Home based - EMEA, Tampere, Finland",
        "Home based - EMEA, Tallinn, Estonia",
        "Home based - EMEA, Riga, Latvia",
        "Home based - EMEA, Vilnius, Lithuania",
        "Home based - EMEA, Kyiv, Ukraine",
        "Home based - EMEA, Lviv, Ukraine",
        "Home based - EMEA, Istanbul, Turkey",
        "Home based - EMEA, Ankara, Turkey",
        "Home based - EMEA, Tel Aviv, Israel",
        "Home based - EMEA, Dubai, United Arab Emirates",
        "Home based - EMEA, Cairo, Egypt",
        "Home based - EMEA, Cape Town, South Africa",
        "Home based - EMEA, Johannesburg, South Africa",
        "Home based - EMEA, Nairobi, Kenya",
        "Home based - EMEA, Lagos, Nigeria",
        "Home based - EMEA, Casablanca, Morocco",
        "Home based - EMEA, Accra, Ghana",
    ],
}

# Locations that get EEOC questions on the application form.
USA_CITIES = list(_US_LOCATIONS)
