"""Offline fallback: nearest prefectural capital.

A fixed table of the 47 prefectural capitals (one per first-level
administrative region).  When online resolution fails, the region code of
the closest capital is used; the table is non-empty, so this always
produces a code.
"""

from dataclasses import dataclass

from loguru import logger

from shelter_nav.lib.geo.geomath import distance
from shelter_nav.lib.geo.types import Coordinate


@dataclass(frozen=True)
class RegionalCapital:
    """A prefectural capital and its region code."""

    code: str
    coordinate: Coordinate
    name: str


def _capital(code: str, lat: float, lng: float, name: str) -> RegionalCapital:
    return RegionalCapital(code=code, coordinate=Coordinate(lat=lat, lng=lng), name=name)


REGIONAL_CAPITALS: tuple[RegionalCapital, ...] = (
    _capital("011002", 43.0642, 141.3469, "北海道札幌市"),
    _capital("022012", 40.8244, 140.7400, "青森県青森市"),
    _capital("032018", 39.7036, 141.1527, "岩手県盛岡市"),
    _capital("041009", 38.2682, 140.8694, "宮城県仙台市"),
    _capital("052019", 39.7186, 140.1024, "秋田県秋田市"),
    _capital("062014", 38.2404, 140.3633, "山形県山形市"),
    _capital("072079", 37.7503, 140.4676, "福島県福島市"),
    _capital("082015", 36.3418, 140.4468, "茨城県水戸市"),
    _capital("092011", 36.5657, 139.8836, "栃木県宇都宮市"),
    _capital("102016", 36.3911, 139.0608, "群馬県前橋市"),
    _capital("111007", 35.8569, 139.6489, "埼玉県さいたま市"),
    _capital("121002", 35.6047, 140.1233, "千葉県千葉市"),
    _capital("131016", 35.6895, 139.6917, "東京都千代田区"),
    _capital("141003", 35.4437, 139.6380, "神奈川県横浜市"),
    _capital("151009", 37.9026, 139.0237, "新潟県新潟市"),
    _capital("162027", 36.6953, 137.2113, "富山県富山市"),
    _capital("172014", 36.5946, 136.6256, "石川県金沢市"),
    _capital("182010", 36.0651, 136.2216, "福井県福井市"),
    _capital("192015", 35.6638, 138.5684, "山梨県甲府市"),
    _capital("202011", 36.6513, 138.1810, "長野県長野市"),
    _capital("212016", 35.3912, 136.7222, "岐阜県岐阜市"),
    _capital("221309", 34.9769, 138.3831, "静岡県静岡市"),
    _capital("231002", 35.1815, 136.9066, "愛知県名古屋市"),
    _capital("242021", 34.7303, 136.5086, "三重県津市"),
    _capital("252018", 35.0044, 135.8686, "滋賀県大津市"),
    _capital("261009", 35.0116, 135.7681, "京都府京都市"),
    _capital("271004", 34.6937, 135.5023, "大阪府大阪市"),
    _capital("281000", 34.6901, 135.1955, "兵庫県神戸市"),
    _capital("292010", 34.6851, 135.8050, "奈良県奈良市"),
    _capital("302015", 34.2261, 135.1675, "和歌山県和歌山市"),
    _capital("312011", 35.5014, 134.2377, "鳥取県鳥取市"),
    _capital("322016", 35.4723, 133.0505, "島根県松江市"),
    _capital("331007", 34.6617, 133.9345, "岡山県岡山市"),
    _capital("341002", 34.3965, 132.4596, "広島県広島市"),
    _capital("352012", 34.1858, 131.4706, "山口県山口市"),
    _capital("362018", 34.0658, 134.5595, "徳島県徳島市"),
    _capital("372013", 34.3401, 134.0434, "香川県高松市"),
    _capital("382019", 33.8416, 132.7657, "愛媛県松山市"),
    _capital("392014", 33.5597, 133.5311, "高知県高知市"),
    _capital("401307", 33.6064, 130.4183, "福岡県福岡市"),
    _capital("412015", 33.2495, 130.2993, "佐賀県佐賀市"),
    _capital("422011", 32.7503, 129.8777, "長崎県長崎市"),
    _capital("431001", 32.7898, 130.7417, "熊本県熊本市"),
    _capital("442011", 33.2382, 131.6126, "大分県大分市"),
    _capital("452017", 31.9111, 131.4239, "宮崎県宮崎市"),
    _capital("462012", 31.5602, 130.5581, "鹿児島県鹿児島市"),
    _capital("472018", 26.2124, 127.6809, "沖縄県那覇市"),
)


def nearest_capital(coordinate: Coordinate) -> tuple[RegionalCapital, float]:
    """Find the capital closest to ``coordinate``.

    Ties go to the earlier table entry.

    Args:
        coordinate: Point to look up.

    Returns:
        Tuple of (capital, distance in metres).
    """
    best = REGIONAL_CAPITALS[0]
    best_distance = distance(coordinate, best.coordinate)
    for capital in REGIONAL_CAPITALS[1:]:
        d = distance(coordinate, capital.coordinate)
        if d < best_distance:
            best, best_distance = capital, d

    logger.info("Fallback region: nearest capital {} ({}) at {:.0f} km", best.name, best.code, best_distance / 1000)
    return best, best_distance
