"""
Demonstration dataset loaded when the service runs without a database.

The records follow the Saskatchewan EMS protocol formulary and cover
each alert level.  Dosages are reference text only.
"""

SAMPLE_MEDICATIONS = [
    {
        "name": "EPINEPHrine/Adrenalin",
        "classification": "Sympathomimetic",
        "alert_level": "HIGH_ALERT",
        "category": "cardiac",
        "indications": "Anaphylaxis, Severe asthma/bronchospasm, Cardiac arrest (VF/pVT, Asystole, PEA), Symptomatic bradycardia",
        "contraindications": "None in life-threatening situations. Relative: Hypertension, coronary artery disease, cerebrovascular disease",
        "adult_dosage": "Anaphylaxis: 0.3-0.5 mg IM (1:1000). Cardiac arrest: 1 mg IV/IO q3-5min. Severe asthma: 0.3-0.5 mg IM",
        "pediatric_dosage": "Anaphylaxis: 0.01 mg/kg IM (max 0.5 mg). Cardiac arrest: 0.01 mg/kg IV/IO q3-5min",
        "route_of_administration": "IV, IO, IM, Endotracheal",
        "onset_duration": "IV: 1-2 min onset, 5-10 min duration. IM: 5-10 min onset, 10-30 min duration",
        "special_considerations": "HIGH ALERT medication. Double-check concentration and dose. Monitor for arrhythmias.",
        "side_effects": "Tachycardia, hypertension, anxiety, tremor, headache, pulmonary edema",
    },
    {
        "name": "Morphine",
        "classification": "Opioid Analgesic",
        "alert_level": "HIGH_ALERT",
        "category": "analgesics",
        "indications": "Moderate to severe pain, Acute myocardial infarction, Acute pulmonary edema",
        "contraindications": "Respiratory depression, Head injury with altered LOC, Hypotension, Known allergy",
        "adult_dosage": "2-4 mg IV q5-10min PRN pain. Max 10 mg in 1 hour. Titrate to effect.",
        "pediatric_dosage": "0.1 mg/kg IV q5-10min PRN. Max 0.2 mg/kg total dose",
        "route_of_administration": "IV, IO, IM",
        "onset_duration": "IV: 2-5 min onset, 3-4 hr duration. IM: 15-30 min onset, 4-6 hr duration",
        "special_considerations": "HIGH ALERT medication. Monitor respiratory status. Have naloxone readily available.",
        "side_effects": "Respiratory depression, hypotension, nausea, vomiting, constipation, sedation",
    },
    {
        "name": "DimenhyDRINATE/Gravol",
        "classification": "Antihistamine/Antiemetic",
        "alert_level": "ELDER_ALERT",
        "category": "neurological",
        "indications": "Nausea and vomiting, Motion sickness, Vertigo",
        "contraindications": "Known hypersensitivity, Narrow-angle glaucoma, Severe liver disease",
        "adult_dosage": "25-50 mg IV/IM q4-6h PRN. Max 300 mg/24h",
        "pediatric_dosage": "1-1.25 mg/kg IV/IM q6h PRN. Max 75 mg/dose",
        "route_of_administration": "IV, IM, PO",
        "onset_duration": "IV: 15-30 min onset, 4-6 hr duration. IM: 30-60 min onset",
        "special_considerations": "ELDER ALERT: Increased risk of anticholinergic effects in elderly. Use lower doses and monitor closely.",
        "side_effects": "Drowsiness, dry mouth, blurred vision, constipation, urinary retention",
    },
    {
        "name": "Salbutamol/Albuterol/Ventolin",
        "classification": "Beta-2 Agonist Bronchodilator",
        "alert_level": "STANDARD",
        "category": "respiratory",
        "indications": "Bronchospasm, Asthma, COPD exacerbation, Hyperkalemia",
        "contraindications": "Known hypersensitivity to salbutamol",
        "adult_dosage": "2.5-5 mg nebulized q20min PRN. MDI: 4-8 puffs q20min PRN",
        "pediatric_dosage": "2.5 mg nebulized q20min PRN if >20kg. MDI: 4-8 puffs with spacer",
        "route_of_administration": "Inhalation (nebulizer, MDI)",
        "onset_duration": "Onset: 5-15 min, Peak: 30-60 min, Duration: 4-6 hr",
        "special_considerations": "Monitor for tachycardia and tremor. Use spacer device for MDI in children.",
        "side_effects": "Tachycardia, tremor, nervousness, headache, muscle cramps",
    },
    {
        "name": "Naloxone/Narcan",
        "classification": "Opioid Antagonist",
        "alert_level": "HIGH_ALERT",
        "category": "neurological",
        "indications": "Opioid overdose with respiratory depression, Coma of unknown origin",
        "contraindications": "Known hypersensitivity to naloxone",
        "adult_dosage": "0.4-2 mg IV/IM/IN q2-3min. Titrate to adequate respirations. Max 10 mg",
        "pediatric_dosage": "0.01 mg/kg IV/IM/IN q2-3min. Max 0.4 mg/dose",
        "route_of_administration": "IV, IM, IO, Intranasal, Endotracheal",
        "onset_duration": "IV: 1-2 min onset, 30-60 min duration. IM/IN: 2-5 min onset",
        "special_considerations": "HIGH ALERT: May precipitate withdrawal in opioid-dependent patients. Short duration - repeat dosing may be needed.",
        "side_effects": "Withdrawal symptoms, nausea, vomiting, tachycardia, hypertension",
    },
]
