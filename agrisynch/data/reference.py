"""Static agronomic reference data: stage durations, crop advisories, soils.

All tables are keyed by the enums in ``agrisynch.models.enums`` and exposed
through read-only mappings. ``validate_reference_data`` runs at import so an
incomplete table fails the process at load time instead of producing a
silent lookup miss while a request is being served.

Stage durations are in days, listed in cycle order
(sowing, vegetative, flowering, maturity, harvest).
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from agrisynch.models.enums import CropType, GrowthStage, SoilType, WaterRetention
from agrisynch.models.reference import AdvisoryRule, CropDataset, LocalizedName, SoilProfile


class ReferenceDataError(ValueError):
    """Raised when a reference table is missing a required entry."""


def _durations(*days: int) -> Mapping[GrowthStage, int]:
    return MappingProxyType(dict(zip(GrowthStage, days, strict=True)))


STAGE_DURATIONS: Mapping[CropType, Mapping[GrowthStage, int]] = MappingProxyType(
    {
        CropType.rice: _durations(20, 40, 30, 30, 15),
        CropType.wheat: _durations(15, 45, 30, 25, 15),
        CropType.maize: _durations(10, 35, 25, 30, 15),
        CropType.cotton: _durations(15, 45, 40, 50, 30),
        CropType.sugarcane: _durations(35, 85, 120, 90, 30),
        CropType.pulses: _durations(10, 30, 25, 25, 10),
        CropType.vegetables: _durations(10, 25, 20, 20, 15),
    }
)


def _rules(*rules: AdvisoryRule) -> Mapping[GrowthStage, AdvisoryRule]:
    return MappingProxyType({rule.stage: rule for rule in rules})


# ── Crop advisories ─────────────────────────────────────────────────────────

CROP_DATASETS: Mapping[CropType, CropDataset] = MappingProxyType(
    {
        CropType.rice: CropDataset(
            name=LocalizedName(en="Rice", hi="धान", mr="भात"),
            advisories=_rules(
                AdvisoryRule(
                    stage=GrowthStage.sowing,
                    fertilizer="Apply basal dose of DAP (50 kg/acre) and zinc sulphate before transplanting.",
                    pest_alert="Treat seed with Carbendazim to prevent seedling blight.",
                    irrigation="Keep nursery beds saturated; maintain 2-3 cm standing water after transplanting.",
                    tips=("Use healthy 21-25 day old seedlings.", "Transplant 2-3 seedlings per hill."),
                ),
                AdvisoryRule(
                    stage=GrowthStage.vegetative,
                    fertilizer="Top-dress urea (25 kg/acre) at active tillering.",
                    pest_alert="Scout for stem borer dead hearts and leaf folder damage.",
                    irrigation="Maintain 5 cm standing water during tillering.",
                    tips=("Remove weeds within 30 days of transplanting.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.flowering,
                    fertilizer="Apply potash (MOP 15 kg/acre) at panicle initiation.",
                    pest_alert="High risk of blast and brown plant hopper; inspect leaf base and neck nodes.",
                    irrigation="Do not let the field dry out during flowering.",
                    tips=("Avoid pesticide sprays during anthesis hours.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.maturity,
                    fertilizer="No further fertilizer required.",
                    pest_alert="Watch for grain discoloration and rice bug in ripening panicles.",
                    irrigation="Drain the field 10-15 days before harvest.",
                    tips=("Check grain moisture before planning harvest.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.harvest,
                    fertilizer="Plan green manure or residue incorporation for the next season.",
                    pest_alert="Dry grain below 14% moisture to prevent storage pests.",
                    irrigation="Stop irrigation completely.",
                    tips=("Harvest when 80% of panicles turn golden.",),
                ),
            ),
        ),
        CropType.wheat: CropDataset(
            name=LocalizedName(en="Wheat", hi="गेहूं", mr="गहू"),
            advisories=_rules(
                AdvisoryRule(
                    stage=GrowthStage.sowing,
                    fertilizer="Apply half the nitrogen plus full phosphorus and potash at sowing.",
                    pest_alert="Treat seed against termites in light soils.",
                    irrigation="Give pre-sowing irrigation for good germination.",
                    tips=("Sow at 100 kg seed/acre in rows 20 cm apart.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.vegetative,
                    fertilizer="Top-dress remaining nitrogen after the first irrigation.",
                    pest_alert="Monitor aphids and yellow rust on leaves.",
                    irrigation="Irrigate at crown root initiation (21 days after sowing).",
                    tips=("Control Phalaris minor weeds early.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.flowering,
                    fertilizer="Spray 2% urea if leaves show yellowing.",
                    pest_alert="Rust and Karnal bunt risk; spray Propiconazole at first sign.",
                    irrigation="Irrigate at flowering; moisture stress now cuts yield sharply.",
                    tips=("Avoid irrigation on windy days to prevent lodging.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.maturity,
                    fertilizer="No fertilizer needed.",
                    pest_alert="Watch for rodent damage near field borders.",
                    irrigation="Give a light irrigation at milk stage only if soil is very dry.",
                    tips=("Grains are ready when hard and straw turns yellow.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.harvest,
                    fertilizer="Test soil before the next sowing season.",
                    pest_alert="Fumigate storage bins against weevils before stocking grain.",
                    irrigation="No irrigation required.",
                    tips=("Harvest early morning to reduce shattering.",),
                ),
            ),
        ),
        CropType.maize: CropDataset(
            name=LocalizedName(en="Maize", hi="मक्का", mr="मका"),
            advisories=_rules(
                AdvisoryRule(
                    stage=GrowthStage.sowing,
                    fertilizer="Apply NPK 12:32:16 (50 kg/acre) in furrows at sowing.",
                    pest_alert="Treat seed with Thiamethoxam against shoot fly.",
                    irrigation="Irrigate lightly right after sowing.",
                    tips=("Maintain 60 x 20 cm spacing.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.vegetative,
                    fertilizer="Top-dress urea at knee-high stage.",
                    pest_alert="Fall armyworm alert: inspect whorls for frass and window-pane feeding.",
                    irrigation="Irrigate every 8-10 days; avoid waterlogging.",
                    tips=("Earth up plants after top-dressing.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.flowering,
                    fertilizer="Final nitrogen split at tasseling.",
                    pest_alert="Check for stem borer and cob damage at silking.",
                    irrigation="Tasseling and silking are the most water-sensitive stages.",
                    tips=("Do not disturb plants during pollination.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.maturity,
                    fertilizer="No fertilizer required.",
                    pest_alert="Watch for ear rot after rain.",
                    irrigation="Reduce irrigation as husks dry.",
                    tips=("Black layer at kernel base means physiological maturity.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.harvest,
                    fertilizer="Incorporate stalks to return organic matter.",
                    pest_alert="Dry cobs well to prevent aflatoxin in storage.",
                    irrigation="No irrigation required.",
                    tips=("Harvest when husk turns pale brown.",),
                ),
            ),
        ),
        CropType.cotton: CropDataset(
            name=LocalizedName(en="Cotton", hi="कपास", mr="कापूस"),
            advisories=_rules(
                AdvisoryRule(
                    stage=GrowthStage.sowing,
                    fertilizer="Apply farmyard manure and a basal dose of SSP.",
                    pest_alert="Protect seedlings from jassids and thrips with seed treatment.",
                    irrigation="Ensure adequate moisture for germination.",
                    tips=("Plant refuge rows around Bt cotton.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.vegetative,
                    fertilizer="Top-dress nitrogen at square formation.",
                    pest_alert="Monitor sucking pests: whitefly, aphids and jassids.",
                    irrigation="Irrigate at 10-12 day intervals if dry.",
                    tips=("Install yellow sticky traps.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.flowering,
                    fertilizer="Spray 2% DAP to reduce flower shedding.",
                    pest_alert="Pink bollworm risk: install pheromone traps and inspect rosette flowers.",
                    irrigation="Keep soil moist during flowering and boll setting.",
                    tips=("Remove and destroy rosette flowers.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.maturity,
                    fertilizer="No fertilizer required.",
                    pest_alert="Check opened bolls for bollworm exit holes.",
                    irrigation="Stop irrigation once most bolls open.",
                    tips=("Pick cotton in dry weather.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.harvest,
                    fertilizer="Uproot and shred stalks; do not leave them standing.",
                    pest_alert="Destroy crop residue to break the pink bollworm cycle.",
                    irrigation="No irrigation required.",
                    tips=("Store picked cotton in clean, dry bags.",),
                ),
            ),
        ),
        CropType.sugarcane: CropDataset(
            name=LocalizedName(en="Sugarcane", hi="गन्ना", mr="ऊस"),
            advisories=_rules(
                AdvisoryRule(
                    stage=GrowthStage.sowing,
                    fertilizer="Apply press mud or compost in furrows before planting setts.",
                    pest_alert="Dip setts in fungicide against sett rot.",
                    irrigation="Irrigate immediately after planting.",
                    tips=("Use three-bud setts from healthy cane.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.vegetative,
                    fertilizer="Apply nitrogen in splits during tillering.",
                    pest_alert="Early shoot borer alert: look for dead hearts.",
                    irrigation="Irrigate every 7-10 days in summer.",
                    tips=("Use trash mulching to save moisture.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.flowering,
                    fertilizer="Final nitrogen and potash dose before earthing up.",
                    pest_alert="Top borer and woolly aphid risk during grand growth.",
                    irrigation="Peak water demand during grand growth; do not skip irrigation.",
                    tips=("Prop canes to prevent lodging.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.maturity,
                    fertilizer="No fertilizer required.",
                    pest_alert="Watch for red rot symptoms in stalks.",
                    irrigation="Reduce irrigation to build sugar content.",
                    tips=("Check Brix with a hand refractometer.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.harvest,
                    fertilizer="Plan ratoon fertilization after harvest.",
                    pest_alert="Crush cane within 24 hours of cutting to avoid sucrose loss.",
                    irrigation="Stop irrigation 2 weeks before harvest.",
                    tips=("Cut cane close to the ground.",),
                ),
            ),
        ),
        CropType.pulses: CropDataset(
            name=LocalizedName(en="Pulses", hi="दालें", mr="कडधान्य"),
            advisories=_rules(
                AdvisoryRule(
                    stage=GrowthStage.sowing,
                    fertilizer="Treat seed with Rhizobium culture; apply phosphorus at sowing.",
                    pest_alert="Seed treatment against wilt and root rot.",
                    irrigation="Sow into adequate residual moisture.",
                    tips=("Avoid excess nitrogen; pulses fix their own.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.vegetative,
                    fertilizer="Spray micronutrients if leaves yellow.",
                    pest_alert="Monitor for aphids and leaf miners.",
                    irrigation="Light irrigation only if soil is dry.",
                    tips=("Keep field weed-free for the first 45 days.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.flowering,
                    fertilizer="Spray 2% urea at flowering to improve pod set.",
                    pest_alert="Pod borer risk: install pheromone traps and bird perches.",
                    irrigation="One irrigation at flowering boosts pod formation.",
                    tips=("Avoid irrigation that leaves standing water.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.maturity,
                    fertilizer="No fertilizer required.",
                    pest_alert="Inspect pods for borer holes.",
                    irrigation="No irrigation needed during pod maturity.",
                    tips=("Harvest when 80% of pods turn brown.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.harvest,
                    fertilizer="Crop residue enriches soil nitrogen; incorporate it.",
                    pest_alert="Protect stored grain from pulse beetle.",
                    irrigation="No irrigation required.",
                    tips=("Dry seeds well before storage.",),
                ),
            ),
        ),
        CropType.vegetables: CropDataset(
            name=LocalizedName(en="Vegetables", hi="सब्ज़ियाँ", mr="भाजीपाला"),
            advisories=_rules(
                AdvisoryRule(
                    stage=GrowthStage.sowing,
                    fertilizer="Mix well-rotted compost into beds before sowing.",
                    pest_alert="Use Trichoderma in nursery to prevent damping off.",
                    irrigation="Water nursery beds lightly every day.",
                    tips=("Raise seedlings under net to keep pests off.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.vegetative,
                    fertilizer="Apply NPK 19:19:19 through drip or foliar spray.",
                    pest_alert="Watch for whitefly and leaf curl virus.",
                    irrigation="Irrigate every 3-4 days; drip preferred.",
                    tips=("Stake tall plants early.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.flowering,
                    fertilizer="Apply calcium and boron to reduce flower drop.",
                    pest_alert="Fruit borer risk: inspect flowers and young fruits.",
                    irrigation="Keep moisture even to prevent fruit cracking.",
                    tips=("Remove infected fruits promptly.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.maturity,
                    fertilizer="Potash spray improves fruit quality.",
                    pest_alert="Check for fruit fly; use bait traps.",
                    irrigation="Irrigate lightly after each picking.",
                    tips=("Pick at the right maturity for market.",),
                ),
                AdvisoryRule(
                    stage=GrowthStage.harvest,
                    fertilizer="Add compost before the next planting.",
                    pest_alert="Remove crop debris to reduce carry-over pests.",
                    irrigation="Irrigate only if continuing pickings.",
                    tips=("Grade produce before sending to market.",),
                ),
            ),
        ),
    }
)


# ── Soil profiles ───────────────────────────────────────────────────────────

SOIL_PROFILES: Mapping[SoilType, SoilProfile] = MappingProxyType(
    {
        SoilType.alluvial: SoilProfile(
            type=SoilType.alluvial,
            name=LocalizedName(en="Alluvial", hi="जलोढ़", mr="गाळाची"),
            water_retention=WaterRetention.medium,
            drainage="Good",
            fertility="High in potash, low in nitrogen",
            action_tips=("Add nitrogen through split doses.", "Suitable for most cereals."),
        ),
        SoilType.black: SoilProfile(
            type=SoilType.black,
            name=LocalizedName(en="Black", hi="काली", mr="काळी"),
            water_retention=WaterRetention.high,
            drainage="Poor; cracks when dry",
            fertility="Rich in calcium and magnesium, low in phosphorus",
            action_tips=("Avoid over-irrigation; open drainage channels.", "Ideal for cotton."),
        ),
        SoilType.red: SoilProfile(
            type=SoilType.red,
            name=LocalizedName(en="Red", hi="लाल", mr="तांबडी"),
            water_retention=WaterRetention.medium,
            drainage="Good",
            fertility="Low in nitrogen and phosphorus",
            action_tips=("Add organic manure regularly.", "Apply lime if soil is acidic."),
        ),
        SoilType.laterite: SoilProfile(
            type=SoilType.laterite,
            name=LocalizedName(en="Laterite", hi="लेटराइट", mr="जांभी"),
            water_retention=WaterRetention.medium,
            drainage="Good to excessive",
            fertility="Poor; acidic and leached",
            action_tips=("Apply lime and organic matter.", "Use mulching to reduce leaching."),
        ),
        SoilType.sandy: SoilProfile(
            type=SoilType.sandy,
            name=LocalizedName(en="Sandy", hi="बलुई", mr="वाळूमय"),
            water_retention=WaterRetention.low,
            drainage="Excessive",
            fertility="Low organic matter",
            action_tips=(
                "Irrigate in small, frequent doses; water drains quickly.",
                "Mulch to reduce evaporation.",
            ),
        ),
    }
)


def validate_reference_data() -> None:
    """Check every (crop type x stage) and soil type has an entry.

    Raises ``ReferenceDataError`` listing all gaps at once.
    """
    missing: list[str] = []
    for crop_type in CropType:
        durations = STAGE_DURATIONS.get(crop_type)
        if durations is None:
            missing.append(f"stage durations for {crop_type}")
        else:
            for stage in GrowthStage:
                if durations.get(stage, 0) <= 0:
                    missing.append(f"positive duration for {crop_type}/{stage}")

        dataset = CROP_DATASETS.get(crop_type)
        if dataset is None:
            missing.append(f"advisory dataset for {crop_type}")
            continue
        for stage in GrowthStage:
            rule = dataset.advisories.get(stage)
            if rule is None:
                missing.append(f"advisory for {crop_type}/{stage}")
            elif rule.stage is not stage:
                missing.append(f"advisory for {crop_type}/{stage} is filed under {rule.stage}")

    for soil_type in SoilType:
        profile = SOIL_PROFILES.get(soil_type)
        if profile is None:
            missing.append(f"soil profile for {soil_type}")
        elif not profile.action_tips:
            missing.append(f"action tips for soil {soil_type}")

    if missing:
        raise ReferenceDataError("incomplete reference data: " + "; ".join(missing))


validate_reference_data()
